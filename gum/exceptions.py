"""Custom exception classes for gum error handling.

This module defines the exception hierarchy raised by gum commands:
- AbortedError: The user cancelled an interactive command
- TimedOutError: An interactive command ran out of time
- StyleError: Invalid colour, spacing, border or alignment values
- ConfigError: Style defaults file missing or malformed

All exceptions inherit from GumError for consistent error handling.
"""

from typing import Any


class GumError(Exception):
    """Base exception for all gum errors.

    Provides a common base class for all custom exceptions raised by gum
    commands, enabling catch-all error handling when needed.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (option
                    names, offending values, file paths, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class AbortedError(GumError):
    """Exception raised when the user cancels an interactive command.

    Aborting is not a failure: the entrypoint exits with the reserved
    aborted status and prints nothing, so calling scripts can tell a
    cancelled prompt apart from a broken one.
    """

    def __init__(self, message: str = "user aborted", **extra_context: Any) -> None:
        super().__init__(message, extra_context)


class TimedOutError(GumError):
    """Exception raised when an interactive command exceeds its timeout."""

    def __init__(self, message: str = "timeout", **extra_context: Any) -> None:
        super().__init__(message, extra_context)


class StyleError(GumError):
    """Exception raised when a style option cannot be interpreted.

    Context typically includes:
        - option: Name of the offending option (e.g. "margin")
        - value: The value that was rejected
    """

    def __init__(
        self,
        message: str,
        option: str | None = None,
        value: Any = None,
        **extra_context: Any,
    ) -> None:
        """Initialize style error with option details.

        Args:
            message: Human-readable error description
            option: Name of the option that failed to parse
            value: Rejected value
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if option is not None:
            context["option"] = option
        if value is not None:
            context["value"] = value
        context.update(extra_context)

        super().__init__(message, context)


class ConfigError(GumError):
    """Configuration file error.

    Raised when the style defaults file cannot be loaded, parsed, or
    contains keys gum does not know about.
    """
