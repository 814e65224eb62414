"""Cyclopts application and process entrypoint for gum.

This module defines the main Cyclopts application, registers the gum
sub-commands, and owns the process lifecycle:

1. Save the console input mode (restored on every exit path)
2. Resolve the version string from build metadata
3. Parse arguments and run the selected command
4. Map the command's outcome to an exit status

The CLI provides the following commands:
- style: Apply colours, borders and spacing to text
- join: Join blocks of text vertically or horizontally
- confirm: Ask a yes/no question
- input: Prompt for a single line of input
"""

import logging
import sys
from collections.abc import Callable, Sequence

from cyclopts import App
from cyclopts.config import Env

from gum.cli import commands
from gum.cli.outcome import ExitOutcome, Failed, outcome_from_error, outcome_from_result
from gum.cli.output import BUBBLE_GUM_PINK, configure_logging, print_failure, styled
from gum.cli.version import VersionInfo, build_metadata, resolve_version
from gum.console import ConsoleBackend, console_backend, preserve_console_mode

logger = logging.getLogger(__name__)

ENV_PREFIX = "GUM_"


def build_app(version: VersionInfo) -> App:
    """Create the gum Cyclopts application.

    Every command option can also be set through an environment variable
    named ``GUM_<COMMAND>_<OPTION>``, e.g. ``GUM_STYLE_FOREGROUND``.

    Args:
        version: Version shown by ``gum --version``

    Returns:
        Configured App with all sub-commands registered
    """
    glamorous = styled(BUBBLE_GUM_PINK)("glamorous")
    app = App(
        name="gum",
        help=f"A tool for {glamorous} shell scripts.",
        help_format="rich",
        version=str(version),
        config=Env(ENV_PREFIX, command=True),
    )

    app.command(commands.style)
    app.command(commands.join)
    app.command(commands.confirm)
    app.command(commands.input_, name="input")
    return app


def run_command(app: App, tokens: Sequence[str] | None = None) -> ExitOutcome:
    """Parse ``tokens`` and run the selected command.

    Parse errors are reported by Cyclopts together with the usage text and
    end the process through SystemExit.

    Args:
        app: Application to dispatch through
        tokens: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        The outcome of the command
    """
    command, bound, _ = app.parse_args(tokens, help_on_error=True)
    try:
        result = command(*bound.args, **bound.kwargs)
    except (Exception, KeyboardInterrupt) as e:
        logger.debug("command %s raised", getattr(command, "__name__", command), exc_info=True)
        return outcome_from_error(e)
    return outcome_from_result(result)


def run(
    argv: Sequence[str] | None = None,
    *,
    backend_factory: Callable[[], ConsoleBackend | None] = console_backend,
) -> int:
    """Run gum and return the process exit status.

    The console input mode is saved before anything touches the terminal
    and restored when this function leaves, whether it returns, the parser
    exits, or an exception escapes.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        backend_factory: Selects the console backend for this platform

    Returns:
        0 on success, 130 if the user aborted, 1 if the command failed (its
        message is printed to stdout), or the status the command returned
    """
    # Nothing before the guard writes console modes.
    configure_logging()

    with preserve_console_mode(backend_factory()):
        version = resolve_version(*build_metadata())
        app = build_app(version)

        outcome = run_command(app, argv)
        logger.debug("command outcome: %r", outcome)
        if isinstance(outcome, Failed):
            print_failure(outcome.message)

    return outcome.status


def main() -> None:
    """Script entry point: run gum and exit with its status."""
    sys.exit(run(sys.argv[1:]))
