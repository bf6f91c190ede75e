"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))


class MemoryWriter:
    """In-memory TerminalWriter that records every write."""

    def __init__(self, terminal: bool = True):
        self.terminal = terminal
        self.data = bytearray()
        self.writes = 0

    def write_sync(self, data: bytes) -> int:
        self.data.extend(data)
        self.writes += 1
        return len(data)

    def is_terminal(self) -> bool:
        return self.terminal

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")

    def reset(self) -> None:
        self.data.clear()
        self.writes = 0


class FailingWriter(MemoryWriter):
    """Writer whose every write fails like a closed pipe."""

    def write_sync(self, data: bytes) -> int:
        raise BrokenPipeError("stream closed")


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def writer():
    return MemoryWriter()


@pytest.fixture
def clock():
    return FakeClock()


def pytest_collection_modifyitems(config, items):
    """
    Modify test items to add helpful markers.
    """
    for item in items:
        if "property" in item.nodeid.lower():
            item.add_marker("property")
        if "compositor" in item.nodeid.lower() or "progress" in item.nodeid.lower():
            item.add_marker("terminal_output")


def pytest_configure(config):
    config.addinivalue_line("markers", "property: hypothesis property tests")
    config.addinivalue_line("markers", "terminal_output: tests asserting exact escape sequences")
