"""Outcomes of running a gum command.

A command either succeeds, is aborted by the user, fails with a message, or
deliberately exits with its own status (``confirm`` answering "no"). The
entrypoint turns whichever happened into a process exit status.
"""

from dataclasses import dataclass
from typing import Any, Union

from gum.cli.exit_codes import ExitCode
from gum.exceptions import AbortedError, TimedOutError


@dataclass(frozen=True)
class Success:
    """The command completed normally."""

    @property
    def status(self) -> int:
        return ExitCode.SUCCESS


@dataclass(frozen=True)
class Aborted:
    """The user cancelled the command. Nothing is printed."""

    @property
    def status(self) -> int:
        return ExitCode.ABORTED


@dataclass(frozen=True)
class Failed:
    """The command raised an error; ``message`` is printed before exiting."""

    message: str

    @property
    def status(self) -> int:
        return ExitCode.ERROR


@dataclass(frozen=True)
class Exited:
    """The command returned a non-zero status of its own. Nothing is printed."""

    code: int

    @property
    def status(self) -> int:
        return self.code


ExitOutcome = Union[Success, Aborted, Failed, Exited]


def outcome_from_result(result: Any) -> ExitOutcome:
    """Map a command's return value to an outcome.

    Commands return None or an exit code, the way the cyclopts commands in
    this package do.

    Args:
        result: Value returned by the command

    Returns:
        Success for None or 0, Exited for any other integer status
    """
    if isinstance(result, bool) or not isinstance(result, int) or result == ExitCode.SUCCESS:
        return Success()
    return Exited(result)


def outcome_from_error(error: BaseException) -> ExitOutcome:
    """Map an exception raised by a command to an outcome.

    Args:
        error: Exception raised while the command ran

    Returns:
        Aborted for user cancellation (AbortedError or Ctrl+C), Exited with
        the timeout status for TimedOutError, Failed with the error's text
        for anything else
    """
    if isinstance(error, (AbortedError, KeyboardInterrupt)):
        return Aborted()
    if isinstance(error, TimedOutError):
        return Exited(ExitCode.TIMEOUT)
    return Failed(str(error))
