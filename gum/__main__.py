"""CLI entry point for gum.

Enables invocation via `python -m gum`.

The entrypoint runs the selected command inside the console mode guard and
exits with the status mapped from the command's outcome.
"""

from gum.cli.app import main

if __name__ == "__main__":
    main()
