"""Shared test fixtures and Hypothesis strategies for gum tests."""

import io
from contextlib import contextmanager

import pytest
from hypothesis import strategies as st
from rich.console import Console

from gum.console import ENABLE_VIRTUAL_TERMINAL_INPUT


class FakeConsole:
    """In-memory ConsoleBackend.

    Mimics the Windows console: a rejected SetConsoleMode call still leaves
    the requested bits set on the input handle, so callers must write the
    original mode back themselves.

    Attributes:
        mode: Current console input mode
        writes: Every mode passed to set_mode, in order
        opened: Number of handles opened so far
        open_handles: Number of handles currently open
    """

    def __init__(
        self,
        mode: int = 0x1F7,
        vt_supported: bool = True,
        openable: bool = True,
        readable: bool = True,
    ) -> None:
        self.mode = mode
        self.vt_supported = vt_supported
        self.openable = openable
        self.readable = readable
        self.writes: list[int] = []
        self.opened = 0
        self.open_handles = 0

    @contextmanager
    def open_input(self):
        if not self.openable:
            raise OSError("The system cannot find the file specified: 'CONIN$'")
        self.opened += 1
        self.open_handles += 1
        try:
            yield object()
        finally:
            self.open_handles -= 1

    def get_mode(self, handle):
        if not self.readable:
            raise OSError("The handle is invalid")
        return self.mode

    def set_mode(self, handle, mode):
        self.writes.append(mode)
        self.mode = mode
        if mode & ENABLE_VIRTUAL_TERMINAL_INPUT and not self.vt_supported:
            raise OSError("The parameter is incorrect")


@pytest.fixture
def fake_console():
    """A console that supports virtual terminal input."""
    return FakeConsole()


@pytest.fixture
def plain_output(monkeypatch):
    """Route command output through an uncoloured in-memory console.

    Returns:
        The StringIO receiving everything commands print via rich
    """
    buffer = io.StringIO()
    monkeypatch.setattr(
        "gum.cli.commands.console",
        Console(file=buffer, color_system=None, width=80, highlight=False),
    )
    return buffer


@pytest.fixture
def clean_env(monkeypatch):
    """Remove GUM_* variables from the environment for one test."""
    for name in ("GUM_CONFIG", "GUM_VERSION", "GUM_COMMIT_SHA", "GUM_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


console_modes = st.integers(min_value=0, max_value=0xFFFFFFFF)
"""Any 32-bit console mode bitmask."""

commit_ids = st.text(alphabet="0123456789abcdef", max_size=40)
"""Commit identifiers, including empty and short ones."""
