"""Styled output, failure reporting and logging setup for gum.

This module provides:
- console: The rich Console commands print through (fixed 256 colours)
- styled: Returns a renderer for a colour token
- parse_color / parse_spacing: Turn gum option values into rich values
- print_failure: Prints a failed command's message
- configure_logging: Installs the stderr log handler on the ``gum`` logger
"""

import logging
import os
from collections.abc import Callable, Mapping

from rich.color import Color, ColorParseError
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from gum.exceptions import StyleError

BUBBLE_GUM_PINK = "212"

LOG_LEVEL_ENV_VAR = "GUM_LOG_LEVEL"

console = Console(color_system="256", highlight=False)


def parse_color(value: str | None, option: str = "color") -> str | None:
    """Convert a gum colour value into a rich colour definition.

    ANSI 256 indices ("212") become ``color(212)``; hex codes and named
    colours pass through after validation.

    Args:
        value: Colour as given on the command line, empty for none
        option: Option name used in error messages

    Returns:
        Rich colour string, or None when ``value`` is empty

    Raises:
        StyleError: If rich cannot parse the colour
    """
    if not value:
        return None

    value = value.strip()
    color = f"color({value})" if value.isdigit() else value
    try:
        Color.parse(color)
    except ColorParseError as e:
        raise StyleError(f"Invalid {option}", option=option, value=value) from e
    return color


def parse_spacing(value: str, option: str = "padding") -> tuple[int, int, int, int]:
    """Parse CSS-style shorthand spacing ("1", "1 2", "1 2 3", "1 2 3 4").

    Args:
        value: Space separated cell counts
        option: Option name used in error messages

    Returns:
        (top, right, bottom, left)

    Raises:
        StyleError: If the value is not 1 to 4 non-negative integers

    Example:
        >>> parse_spacing("1 2")
        (1, 2, 1, 2)
    """
    parts = value.split()
    try:
        numbers = [int(part) for part in parts]
    except ValueError as e:
        raise StyleError(f"Invalid {option}", option=option, value=value) from e

    if not 1 <= len(numbers) <= 4 or any(n < 0 for n in numbers):
        raise StyleError(f"Invalid {option}", option=option, value=value)

    if len(numbers) == 1:
        top = right = bottom = left = numbers[0]
    elif len(numbers) == 2:
        top, right = numbers
        bottom, left = top, right
    elif len(numbers) == 3:
        top, right, bottom = numbers
        left = right
    else:
        top, right, bottom, left = numbers
    return top, right, bottom, left


def styled(color: str) -> Callable[[str], str]:
    """Return a renderer that wraps text in rich markup for ``color``.

    Example:
        >>> styled("212")("glamorous")
        '[color(212)]glamorous[/color(212)]'
    """
    style = parse_color(color)

    def render(text: str) -> str:
        return Text(text, style=style or "").markup

    return render


def print_failure(message: str) -> None:
    """Print a failed command's message to stdout, verbatim."""
    print(message)


def configure_logging(level: str | None = None, env: Mapping[str, str] | None = None) -> None:
    """Install a rich stderr handler on the ``gum`` logger.

    Args:
        level: Log level name (debug, info, warning, error); defaults to
            ``GUM_LOG_LEVEL`` and then "warning"
        env: Environment to read ``GUM_LOG_LEVEL`` from (defaults to os.environ)
    """
    env = os.environ if env is None else env
    level = (level or env.get(LOG_LEVEL_ENV_VAR) or "warning").upper()
    numeric = logging.getLevelName(level)
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    logger = logging.getLogger("gum")
    logger.setLevel(numeric)

    if not any(getattr(h, "_gum_handler", False) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True, highlight=False),
            show_time=False,
            show_path=False,
        )
        handler._gum_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
