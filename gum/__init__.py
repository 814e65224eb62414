"""gum: a tool for glamorous shell scripts.

This package provides styled output and interactive prompts for shell
scripts, wrapped in an entrypoint that keeps Windows console input modes
intact across runs.
"""

from gum.cli.app import main, run

__all__ = ["main", "run"]
