"""Console input mode preservation for Windows terminals.

Some terminal hosts (PowerShell in particular) keep stale mode bits on the
console input handle after a child process exits. gum therefore captures the
console input mode once at startup, checks whether
``ENABLE_VIRTUAL_TERMINAL_INPUT`` can be set without leaving it set, and
writes the original mode back on every exit path, re-adding the virtual
terminal flag only when the trial write proved it is supported.

This module provides:
- ConsoleModeSnapshot: The mode captured at startup
- ConsoleBackend: The platform calls the guard needs
- WindowsConsole: ctypes implementation of ConsoleBackend
- console_backend: Picks the backend for the running platform
- save / restore: The two halves of the protocol
- preserve_console_mode: Scoped acquisition pairing save with restore

Everything here is best effort: failures are logged at DEBUG and otherwise
ignored.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, ContextManager, Protocol

logger = logging.getLogger(__name__)

ENABLE_VIRTUAL_TERMINAL_INPUT = 0x0200

CONSOLE_INPUT_DEVICE = "CONIN$"

_MAX_MODE = 0xFFFFFFFF


@dataclass(frozen=True)
class ConsoleModeSnapshot:
    """Console input mode captured by :func:`save`.

    Attributes:
        original_mode: Mode bitmask read from the console at startup
        vt_input_supported: Whether setting ENABLE_VIRTUAL_TERMINAL_INPUT
            succeeded during the trial write
    """

    original_mode: int
    vt_input_supported: bool = False

    @property
    def restored_mode(self) -> int:
        """Mode written back by :func:`restore`."""
        if self.vt_input_supported:
            return self.original_mode | ENABLE_VIRTUAL_TERMINAL_INPUT
        return self.original_mode


class ConsoleBackend(Protocol):
    """Platform console calls used by the mode guard.

    Every method signals failure by raising OSError.
    """

    def open_input(self) -> ContextManager[Any]:
        """Open a fresh console input handle, closing it on exit."""
        ...

    def get_mode(self, handle: Any) -> int:
        """Return the current input mode of ``handle``."""
        ...

    def set_mode(self, handle: Any, mode: int) -> None:
        """Set the input mode of ``handle``."""
        ...


class WindowsConsole:
    """ConsoleBackend talking to kernel32 through ctypes."""

    GENERIC_READ = 0x80000000
    GENERIC_WRITE = 0x40000000
    FILE_SHARE_READ = 0x00000001
    FILE_SHARE_WRITE = 0x00000002
    OPEN_EXISTING = 3

    def __init__(self) -> None:
        import ctypes
        from ctypes import wintypes

        self._ctypes = ctypes
        self._wintypes = wintypes

        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)

        kernel32.CreateFileW.argtypes = [
            wintypes.LPCWSTR,
            wintypes.DWORD,
            wintypes.DWORD,
            wintypes.LPVOID,
            wintypes.DWORD,
            wintypes.DWORD,
            wintypes.HANDLE,
        ]
        kernel32.CreateFileW.restype = wintypes.HANDLE
        kernel32.CloseHandle.argtypes = [wintypes.HANDLE]
        kernel32.CloseHandle.restype = wintypes.BOOL
        kernel32.GetConsoleMode.argtypes = [wintypes.HANDLE, wintypes.LPDWORD]
        kernel32.GetConsoleMode.restype = wintypes.BOOL
        kernel32.SetConsoleMode.argtypes = [wintypes.HANDLE, wintypes.DWORD]
        kernel32.SetConsoleMode.restype = wintypes.BOOL

        self._kernel32 = kernel32
        self._invalid_handle = wintypes.HANDLE(-1).value

    def _last_error(self) -> OSError:
        return self._ctypes.WinError(self._ctypes.get_last_error())

    @contextmanager
    def open_input(self) -> Iterator[Any]:
        handle = self._kernel32.CreateFileW(
            CONSOLE_INPUT_DEVICE,
            self.GENERIC_READ | self.GENERIC_WRITE,
            self.FILE_SHARE_READ | self.FILE_SHARE_WRITE,
            None,
            self.OPEN_EXISTING,
            0,
            None,
        )
        if not handle or handle == self._invalid_handle:
            raise self._last_error()
        try:
            yield handle
        finally:
            self._kernel32.CloseHandle(handle)

    def get_mode(self, handle: Any) -> int:
        mode = self._wintypes.DWORD()
        if not self._kernel32.GetConsoleMode(handle, self._ctypes.byref(mode)):
            raise self._last_error()
        return mode.value

    def set_mode(self, handle: Any, mode: int) -> None:
        if not self._kernel32.SetConsoleMode(handle, mode):
            raise self._last_error()


def console_backend(platform: str | None = None) -> ConsoleBackend | None:
    """Return the console backend for ``platform``, or None if it has none.

    Args:
        platform: Platform identifier (defaults to ``sys.platform``)

    Returns:
        A WindowsConsole on Windows, None everywhere else. None turns
        :func:`save` and :func:`restore` into no-ops.
    """
    platform = sys.platform if platform is None else platform
    if platform != "win32":
        return None
    try:
        return WindowsConsole()
    except (OSError, AttributeError) as e:
        logger.debug("console backend unavailable: %s", e)
        return None


def _validate_mode(mode: Any) -> int:
    if isinstance(mode, bool) or not isinstance(mode, int) or not 0 <= mode <= _MAX_MODE:
        raise OSError(f"malformed console mode: {mode!r}")
    return mode


def save(backend: ConsoleBackend | None) -> ConsoleModeSnapshot | None:
    """Capture the console input mode and test virtual terminal input support.

    A trial write sets ``original | ENABLE_VIRTUAL_TERMINAL_INPUT`` and then
    writes ``original`` back unconditionally, even when the trial write failed,
    because the console remembers invalid bits on input handles.

    Args:
        backend: Console backend, or None on platforms without console modes

    Returns:
        The captured snapshot, or None if the console could not be opened
        or read.
    """
    if backend is None:
        return None

    try:
        with backend.open_input() as handle:
            original = _validate_mode(backend.get_mode(handle))

            supported = True
            try:
                backend.set_mode(handle, original | ENABLE_VIRTUAL_TERMINAL_INPUT)
            except OSError as e:
                logger.debug("virtual terminal input not supported: %s", e)
                supported = False

            try:
                backend.set_mode(handle, original)
            except OSError as e:
                logger.debug("failed to revert console mode after trial write: %s", e)
    except OSError as e:
        logger.debug("cannot read console input mode: %s", e)
        return None

    snapshot = ConsoleModeSnapshot(original_mode=original, vt_input_supported=supported)
    logger.debug(
        "saved console mode %#x (vt input supported: %s)",
        snapshot.original_mode,
        snapshot.vt_input_supported,
    )
    return snapshot


def restore(backend: ConsoleBackend | None, snapshot: ConsoleModeSnapshot | None) -> None:
    """Write the saved console input mode back through a fresh handle.

    Safe to call any number of times; each call writes the same mode.

    Args:
        backend: Console backend, or None on platforms without console modes
        snapshot: Snapshot returned by :func:`save`, or None if it failed
    """
    if backend is None or snapshot is None:
        return

    try:
        with backend.open_input() as handle:
            backend.set_mode(handle, snapshot.restored_mode)
    except OSError as e:
        logger.debug("cannot restore console input mode: %s", e)
        return

    logger.debug("restored console mode %#x", snapshot.restored_mode)


@contextmanager
def preserve_console_mode(backend: ConsoleBackend | None) -> Iterator[ConsoleModeSnapshot | None]:
    """Save the console mode on entry and restore it on every exit path.

    The restore step runs on normal exit, on ``SystemExit`` and on any
    exception raised inside the block.

    Args:
        backend: Console backend, or None on platforms without console modes

    Yields:
        The snapshot taken on entry, or None when nothing was saved.

    Example:
        >>> from gum.console import preserve_console_mode
        >>>
        >>> with preserve_console_mode(console_backend()):
        ...     run_interactive_command()
    """
    snapshot = save(backend)
    try:
        yield snapshot
    finally:
        restore(backend, snapshot)
