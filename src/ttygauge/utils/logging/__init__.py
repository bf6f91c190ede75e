from .logging_config import ProgressLogHandler, setup_logging, silence_logging

__all__ = ["ProgressLogHandler", "setup_logging", "silence_logging"]
