"""CLI interface for gum.

This package parses command-line arguments, dispatches to the sub-commands,
and maps their outcomes to process exit codes.
"""
