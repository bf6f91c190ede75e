"""
Render-level configuration for a progress display.

Per-line appearance lives in ``UpdateOptions``; this module covers the
settings that apply to the whole block. Time values are in milliseconds.
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Sequence, Union

from dotenv import dotenv_values, find_dotenv

from ..render.text_metrics import split_lines
from ..terminal.stream import TerminalWriter

logger = logging.getLogger(__name__)

ENV_PREFIX = "TTYGAUGE_"


@dataclass
class RenderConfig:
    """
    Settings shared by every line of one progress display.
    """

    auto_complete_on_all_complete: bool = True
    """Call complete() once every line has completed"""

    clear_all_on_complete: bool = False
    """Erase the whole block when the session completes"""

    display_always: bool = False
    """Render even when the writer is not a terminal"""

    dynamic_complete_height: bool = False
    """On completion, drop lines whose text is empty and close the gaps"""

    dynamic_update_height: bool = False
    """While updating, leave suppressed lines out instead of showing them blank"""

    hide_cursor: bool = False
    """Hide the cursor while the display is live"""

    min_update_interval: float = 20
    """Minimum time between renders (milliseconds)"""

    title: Union[str, Sequence[str]] = ()
    """Static header line(s) kept above the block"""

    tty_columns: Optional[int] = None
    """Terminal width override; None queries the terminal"""

    writer: Optional[TerminalWriter] = None
    """Output sink; None writes to stderr"""

    def title_lines(self) -> List[str]:
        """Title text split into individual lines (any EOL style)."""
        titles = [self.title] if isinstance(self.title, str) else list(self.title)
        titles = [str(t) for t in titles if t is not None]
        if not titles:
            return []
        return split_lines("\n".join(titles))


DEFAULT_RENDER_CONFIG = RenderConfig()


def get_render_config() -> RenderConfig:
    """Get a copy of the default render configuration."""
    return replace(DEFAULT_RENDER_CONFIG)


def _parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"not a boolean: {raw!r}")


_ENV_FIELDS = {
    "MIN_UPDATE_INTERVAL": ("min_update_interval", float),
    "DISPLAY_ALWAYS": ("display_always", _parse_bool),
    "HIDE_CURSOR": ("hide_cursor", _parse_bool),
    "COLUMNS": ("tty_columns", int),
}


def _read_environment(env_file: Optional[str]) -> Dict[str, str]:
    path = env_file if env_file is not None else find_dotenv(usecwd=True)
    values: Dict[str, str] = {}
    if path:
        values.update({k: v for k, v in dotenv_values(path).items() if v is not None})
    values.update(os.environ)
    return values


def load_env_config(
    env_file: Optional[str] = None,
    base: Optional[RenderConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RenderConfig:
    """
    Build a RenderConfig from TTYGAUGE_* environment variables.

    Values from a ``.env`` file are read too; real environment variables win
    over the file. Nothing is loaded at import time.

    Environment Variables:
    - TTYGAUGE_MIN_UPDATE_INTERVAL: throttle in milliseconds
    - TTYGAUGE_DISPLAY_ALWAYS: render even without a terminal
    - TTYGAUGE_HIDE_CURSOR: hide the cursor while live
    - TTYGAUGE_COLUMNS: fixed terminal width

    Args:
        env_file: Path to a dotenv file (default: nearest ``.env`` from cwd)
        base: Configuration to start from (default: the defaults)
        environ: Mapping to read instead of the process environment

    Returns:
        RenderConfig with any valid overrides applied
    """
    values = dict(environ) if environ is not None else _read_environment(env_file)
    overrides = {}
    for suffix, (field_name, parse) in _ENV_FIELDS.items():
        raw = values.get(ENV_PREFIX + suffix)
        if raw is None:
            continue
        try:
            overrides[field_name] = parse(raw)
        except ValueError:
            logger.warning("ignoring malformed %s%s=%r", ENV_PREFIX, suffix, raw)

    return replace(base if base is not None else DEFAULT_RENDER_CONFIG, **overrides)
