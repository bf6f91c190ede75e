"""
Configuration for progress displays.
"""

from .render_config import (
    DEFAULT_RENDER_CONFIG,
    RenderConfig,
    get_render_config,
    load_env_config,
)

__all__ = ["DEFAULT_RENDER_CONFIG", "RenderConfig", "get_render_config", "load_env_config"]
