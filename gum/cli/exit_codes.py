"""Exit code constants for the gum entrypoint.

Calling shell scripts rely on these to tell a cancelled prompt apart from a
failed command.

Exit codes:
    0: SUCCESS - Command completed successfully
    1: ERROR - Command failed (message printed to stdout)
    124: TIMEOUT - Interactive command timed out
    130: ABORTED - User cancelled an interactive command
"""


class ExitCode:
    """Standard exit codes for gum commands.

    Example:
        >>> from gum.cli.exit_codes import ExitCode
        >>> import sys
        >>>
        >>> try:
        ...     # ... prompt the user ...
        ...     sys.exit(ExitCode.SUCCESS)
        ... except AbortedError:
        ...     sys.exit(ExitCode.ABORTED)
    """

    SUCCESS = 0
    """Command completed successfully."""

    ERROR = 1
    """Command failed; the failure message is printed."""

    TIMEOUT = 124
    """Interactive command timed out (matches coreutils timeout)."""

    ABORTED = 130
    """User cancelled an interactive command (128 + SIGINT)."""
