"""
Progress controller: the public entry point for live progress displays.

A ``Progress`` owns one display session. Callers feed it values (one bar)
or lists of values (stacked bars); it merges them into the line state,
renders each line, and redraws the block at most once per
``min_update_interval`` milliseconds. Rendering problems never escape
``update``; the worst outcome is a skipped frame or a disabled display.
"""

from __future__ import annotations

import logging
import numbers
import time
from dataclasses import fields, replace
from typing import Any, Callable, Optional, Sequence, Tuple

from .config.render_config import DEFAULT_RENDER_CONFIG, RenderConfig
from .render.compositor import CursorPosition, DisplayCompositor
from .render.template import RenderedLine, TemplateRenderer
from .render.text_metrics import split_lines
from .schemas.update_options import UpdateOptions
from .state.line_tracker import LineTracker, normalize_updates
from .state.progress_line import ProgressLine
from .terminal.hooks import register_cursor_restore, unregister_cursor_restore
from .terminal.size import get_terminal_size, install_resize_handler
from .terminal.stream import StreamWriter, TerminalWriter

logger = logging.getLogger(__name__)

_RENDER_FIELDS = frozenset(f.name for f in fields(RenderConfig))


class Progress:
    """
    Live progress display for one or more lines.

    Keyword arguments are either render settings (see ``RenderConfig``) or
    default line options (see ``UpdateOptions``); line options can be
    overridden again on every update.

    Example:
        progress = Progress(goal=200, label="download", title="Fetching")
        for done in range(201):
            progress.update(done)
    """

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        *,
        clock: Optional[Callable[[], float]] = None,
        **options: Any,
    ):
        """
        Initialize the display and write the title lines.

        Args:
            config: Base render settings (default: ``DEFAULT_RENDER_CONFIG``)
            clock: Monotonic time source in seconds (default: time.monotonic)
            **options: Render setting overrides and default line options
        """
        render_kwargs = {k: v for k, v in options.items() if k in _RENDER_FIELDS}
        line_kwargs = {k: v for k, v in options.items() if k not in _RENDER_FIELDS}

        self.render_settings = replace(
            config if config is not None else DEFAULT_RENDER_CONFIG, **render_kwargs
        )
        self.default_options = UpdateOptions.model_validate(line_kwargs)

        settings = self.render_settings
        self._writer: TerminalWriter = settings.writer or StreamWriter()
        self._clock = clock or time.monotonic
        self._start_time = self._clock()
        self._last_render: Optional[float] = None
        self._completed = False
        self._cursor_rest = CursorPosition.AFTER_BLOCK
        self._exit_hook: Optional[Callable[[], None]] = None

        self._fixed_columns = settings.tty_columns is not None
        if self._fixed_columns:
            columns = settings.tty_columns
        else:
            columns, _ = get_terminal_size(self._writer)

        self._renderer = TemplateRenderer(columns)
        self._tracker = LineTracker(self.default_options)
        self._compositor = DisplayCompositor(
            self._writer, settings.title_lines(), hide_cursor=settings.hide_cursor
        )

        self._display = (settings.display_always or self._writer.is_terminal()) and columns > 0
        if not self._display:
            logger.debug("progress display disabled (no terminal or zero width)")
            return

        self._write(self._compositor.write_title)

    def __enter__(self) -> "Progress":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.complete()
        return False

    @property
    def is_completed(self) -> bool:
        return self._completed

    @property
    def is_displaying(self) -> bool:
        return self._display

    @property
    def lines(self) -> Tuple[ProgressLine, ...]:
        """Current line records, top to bottom."""
        return self._tracker.lines

    @property
    def writer(self) -> TerminalWriter:
        return self._writer

    @property
    def columns(self) -> int:
        return self._renderer.columns

    @columns.setter
    def columns(self, value: int) -> None:
        if value > 0:
            self._renderer.columns = value

    def _write(self, action: Callable[[], None]) -> bool:
        try:
            action()
            return True
        except Exception:
            logger.warning("progress output failed; display disabled", exc_info=True)
            self._display = False
            return False

    def _elapsed_ms(self, now: float) -> float:
        return (now - self._start_time) * 1000

    def _render_at(self, now: float) -> Callable[[float, UpdateOptions], RenderedLine]:
        elapsed_ms = self._elapsed_ms(now)

        def render(value: float, options: UpdateOptions) -> RenderedLine:
            return self._renderer.render_line(value, options, elapsed_ms)

        return render

    def update(self, updates: Any, options: Any = None, *, force_render: bool = False) -> None:
        """
        Update and redraw the progress display.

        Args:
            updates: A value for line 0, or a list with one entry per line:
                a value, a ``(value, options)`` pair, or None for "no change"
            options: Line option overrides (single-value form only)
            force_render: Redraw even inside the throttle window
        """
        if self._completed or not self._display:
            return

        entries = normalize_updates(updates, options)
        now = self._clock()
        throttled = (
            not force_render
            and self._last_render is not None
            and (now - self._last_render) * 1000 < self.render_settings.min_update_interval
        )

        try:
            self._tracker.apply(entries, self._render_at(now))
        except Exception:
            logger.debug("line render failed; frame skipped", exc_info=True)
            return

        if throttled:
            logger.debug("frame dropped by %sms throttle", self.render_settings.min_update_interval)
            return

        self._last_render = now
        frame = self._tracker.frame(self.render_settings.dynamic_update_height)
        if not self._write(lambda: self._compositor.redraw(frame)):
            return

        if self._tracker.all_completed() and self.render_settings.auto_complete_on_all_complete:
            self.complete()

    def update_single(self, value: float, options: Any = None, *, force_render: bool = False) -> None:
        """Update line 0 (or the line named by ``options.id``) with one value."""
        if not isinstance(value, numbers.Real):
            raise TypeError(f"expected a number, got {type(value).__name__}")
        self.update(value, options, force_render=force_render)

    def update_many(self, updates: Sequence[Any], *, force_render: bool = False) -> None:
        """Update several lines at once; None entries leave their line as is."""
        if not isinstance(updates, (list, tuple)):
            raise TypeError(f"expected a list of updates, got {type(updates).__name__}")
        self.update(list(updates), force_render=force_render)

    def complete(self, cursor_rest: CursorPosition = CursorPosition.AFTER_BLOCK) -> None:
        """
        Finish the display.

        Only needed when finishing before every goal is reached. Calling it
        again does nothing.

        Args:
            cursor_rest: Where to leave the cursor (default: the line after the block)
        """
        if self._completed:
            return
        self._completed = True
        self._cursor_rest = cursor_rest
        if not self._display:
            return

        settings = self.render_settings
        compositor = self._compositor

        def finish() -> None:
            if settings.clear_all_on_complete:
                compositor.clear_block()
            elif settings.dynamic_complete_height:
                compositor.redraw([text for text in compositor.displayed if text])
            compositor.move_to(cursor_rest)

        self._write(finish)
        self.restore_cursor()

    def log(self, message: Any) -> None:
        """
        Write a message above the progress display.

        Works after completion too. Without a live display the message is
        written as plain lines.
        """
        message = str(message)
        if not self._display:
            data = "".join(line + "\n" for line in split_lines(message))
            try:
                self._writer.write_sync(data.encode("utf-8", errors="replace"))
            except Exception:
                logger.debug("plain log write failed", exc_info=True)
            return

        compositor = self._compositor

        def interrupt() -> None:
            compositor.log(message)
            if self._completed:
                compositor.move_to(self._cursor_rest)
                compositor.show_cursor()

        self._write(interrupt)

    def restore_cursor(self) -> None:
        """Make the cursor visible again."""
        self._write(self._compositor.show_cursor)

    def install_exit_hook(self) -> Callable[[], None]:
        """Show the cursor at interpreter exit even if complete() never runs."""
        if self._exit_hook is None:
            self._exit_hook = register_cursor_restore(self._writer)
        return self._exit_hook

    def remove_exit_hook(self) -> None:
        if self._exit_hook is not None:
            unregister_cursor_restore(self._exit_hook)
            self._exit_hook = None

    def watch_resize(self) -> bool:
        """
        Follow terminal resizes (SIGWINCH) for the bar width.

        Returns:
            True if a handler was installed; False with a fixed ``tty_columns``
            or on platforms without SIGWINCH
        """
        if self._fixed_columns:
            return False
        return install_resize_handler(self._on_resize, self._writer)

    def _on_resize(self, columns: int, rows: int) -> None:
        _ = rows
        self.columns = columns
