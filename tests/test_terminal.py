"""
Tests for the terminal adapter: size queries, resize handling, stream
writing and exit hooks.
"""

from __future__ import annotations

import io
import signal

import pytest

from ttygauge.terminal import ansi, hooks as hooks_module, size as size_module
from ttygauge.terminal.stream import StreamWriter, TerminalWriter


def test_get_terminal_size_returns_tuple() -> None:
    """Verify terminal size helper returns a stable tuple."""
    cols, rows = size_module.get_terminal_size()
    assert isinstance(cols, int)
    assert isinstance(rows, int)
    assert cols > 0
    assert rows > 0


def test_get_terminal_size_accepts_stream_without_fileno() -> None:
    cols, _ = size_module.get_terminal_size(io.StringIO())
    assert cols > 0


@pytest.mark.skipif(not hasattr(signal, "SIGWINCH"), reason="no SIGWINCH on this platform")
def test_install_resize_handler_registers_and_chains(monkeypatch) -> None:
    """Verify the resize handler registers SIGWINCH and calls the previous handler."""
    calls = []
    seen = []
    chained = []

    def fake_signal(sig, handler):
        calls.append((sig, handler))

    monkeypatch.setattr(size_module.signal, "signal", fake_signal)
    monkeypatch.setattr(size_module.signal, "getsignal", lambda sig: lambda *a: chained.append(a))
    monkeypatch.setattr(size_module.sys, "platform", "linux", raising=False)
    monkeypatch.setattr(size_module, "get_terminal_size", lambda stream=None: (132, 43))

    installed = size_module.install_resize_handler(lambda cols, rows: seen.append((cols, rows)))
    assert installed is True
    assert calls and calls[0][0] == signal.SIGWINCH

    calls[0][1](signal.SIGWINCH, None)
    assert chained
    assert seen == [(132, 43)]


def test_install_resize_handler_skipped_on_windows(monkeypatch) -> None:
    monkeypatch.setattr(size_module.sys, "platform", "win32", raising=False)
    assert size_module.install_resize_handler(lambda cols, rows: None) is False


@pytest.mark.skipif(not hasattr(signal, "SIGWINCH"), reason="no SIGWINCH on this platform")
def test_install_resize_handler_outside_main_thread(monkeypatch) -> None:
    def refuse(sig, handler):
        raise ValueError("signal only works in main thread")

    monkeypatch.setattr(size_module.signal, "signal", refuse)
    monkeypatch.setattr(size_module.sys, "platform", "linux", raising=False)
    assert size_module.install_resize_handler(lambda cols, rows: None) is False


def test_stream_writer_text_stream() -> None:
    stream = io.StringIO()
    writer = StreamWriter(stream)
    assert writer.write_sync("\x1b[0K漢".encode("utf-8")) == len("\x1b[0K漢".encode("utf-8"))
    assert stream.getvalue() == "\x1b[0K漢"
    assert not writer.is_terminal()
    assert isinstance(writer, TerminalWriter)


def test_stream_writer_binary_buffer() -> None:
    raw = io.BytesIO()
    stream = io.TextIOWrapper(raw, encoding="utf-8")
    writer = StreamWriter(stream)
    stream.write("a")
    writer.write_sync(b"\rb")
    assert raw.getvalue() == b"a\rb"


def test_stream_writer_is_terminal_never_raises() -> None:
    class Broken(io.StringIO):
        def isatty(self):
            raise ValueError("closed")

    writer = StreamWriter(Broken())
    assert writer.is_terminal() is False
    assert writer.fileno() is None


def test_cursor_up_sequences() -> None:
    assert ansi.cursor_up(3) == "\x1b[3A"
    assert ansi.cursor_up(0) == ""
    assert ansi.cursor_up(-2) == ""


def test_cursor_restore_hook(monkeypatch) -> None:
    registered = []
    unregistered = []
    monkeypatch.setattr(hooks_module.atexit, "register", registered.append)
    monkeypatch.setattr(hooks_module.atexit, "unregister", unregistered.append)

    stream = io.StringIO()
    hook = hooks_module.register_cursor_restore(StreamWriter(stream))
    assert registered == [hook]

    hook()
    assert stream.getvalue() == ansi.SHOW_CURSOR

    hooks_module.unregister_cursor_restore(hook)
    assert unregistered == [hook]


@pytest.mark.skipif(not hasattr(signal, "SIGWINCH"), reason="no SIGWINCH on this platform")
def test_install_resize_handler_succeeds_without_prior_python_handler(monkeypatch) -> None:
    monkeypatch.setattr(size_module.signal, "signal", lambda sig, handler: None)
    monkeypatch.setattr(size_module.signal, "getsignal", lambda sig: None)
    monkeypatch.setattr(size_module.sys, "platform", "linux", raising=False)
    assert size_module.install_resize_handler(lambda cols, rows: None) is True
