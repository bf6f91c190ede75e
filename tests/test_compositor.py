"""
Tests for the display compositor's escape-sequence output.
"""

from __future__ import annotations

from conftest import MemoryWriter

from ttygauge.render.compositor import CursorPosition, DisplayCompositor

EOL = "\x1b[0K"
UP1 = "\x1b[1A"


def test_write_title_leaves_cursor_at_block_start() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer, titles=["Title"])
    compositor.write_title()
    assert writer.text == f"\rTitle{EOL}\r\n"
    assert compositor.position is CursorPosition.BLOCK_START


def test_first_redraw_writes_lines_without_trailing_newline() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer)
    compositor.redraw(["a", "b"])
    assert writer.text == f"\ra{EOL}\r\n\rb{EOL}"
    assert compositor.position is CursorPosition.BLOCK_END
    assert compositor.displayed == ("a", "b")
    assert writer.writes == 1


def test_shrinking_block_blanks_excess_lines() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer)
    compositor.redraw(["a", "b"])
    writer.reset()

    compositor.redraw(["c"])
    assert writer.text == f"{UP1}\r\rc{EOL}\r\n\r{EOL}{UP1}"
    assert compositor.displayed == ("c",)


def test_redraw_same_height_moves_up_once() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer)
    compositor.redraw(["a", "b", "c"])
    writer.reset()

    compositor.redraw(["d", "e", "f"])
    assert writer.text == f"\x1b[2A\r\rd{EOL}\r\n\re{EOL}\r\n\rf{EOL}"


def test_hide_cursor_prefixes_frames() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer, hide_cursor=True)
    compositor.redraw(["a"])
    assert writer.text.startswith("\x1b[?25l")


def test_log_rewrites_title_and_block_below_message() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer, titles=["T"])
    compositor.write_title()
    compositor.redraw(["c"])
    writer.reset()

    compositor.log("note")
    assert writer.text == (
        f"\r{UP1}\r\n\r\n\x1b[2A" f"\rnote{EOL}\r\n" f"\rT{EOL}\r\n" f"\rc{EOL}"
    )
    assert compositor.displayed == ("c",)
    assert compositor.position is CursorPosition.BLOCK_END


def test_log_splits_multiline_messages() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer)
    compositor.log("one\r\ntwo\n")
    assert writer.text == f"\rone{EOL}\r\n\rtwo{EOL}\r\n"
    assert compositor.position is CursorPosition.BLOCK_START


def test_clear_block_blanks_bottom_to_top() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer)
    compositor.redraw(["a", "b"])
    writer.reset()

    compositor.clear_block()
    assert writer.text == f"\r{EOL}{UP1}\r{EOL}"
    assert compositor.displayed == ()
    assert compositor.position is CursorPosition.BLOCK_START


def test_move_to_after_block_and_back() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer)
    compositor.redraw(["a", "b"])
    writer.reset()

    compositor.move_to(CursorPosition.AFTER_BLOCK)
    assert writer.text == "\r\n\r"
    writer.reset()

    compositor.move_to(CursorPosition.BLOCK_START)
    assert writer.text == "\x1b[2A\r"
    writer.reset()

    compositor.move_to(CursorPosition.BLOCK_END)
    assert writer.text == f"\r\n\rb{EOL}"


def test_move_to_current_position_writes_nothing() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer)
    compositor.redraw(["a"])
    writer.reset()
    compositor.move_to(CursorPosition.BLOCK_END)
    assert writer.writes == 0


def test_cursor_visibility() -> None:
    writer = MemoryWriter()
    compositor = DisplayCompositor(writer)
    compositor.hide_cursor()
    compositor.show_cursor()
    assert writer.text == "\x1b[?25l\x1b[?25h"
