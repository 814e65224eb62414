"""CLI command implementations.

This module implements the gum sub-commands:
- style: Apply colours, borders and spacing to text
- join: Join blocks of text vertically or side by side
- confirm: Ask a yes/no question, answering through the exit status
- input: Prompt for a single line of input

Each command is a plain function returning None or an exit code. Commands
signal user cancellation by raising AbortedError and failures by raising
GumError subclasses; the entrypoint maps both to exit statuses.
"""

from typing import Annotated, Literal

from cyclopts import Parameter
from rich import box
from rich.align import Align
from rich.cells import cell_len
from rich.padding import Padding
from rich.panel import Panel
from rich.prompt import Prompt
from rich.style import Style
from rich.text import Text

from gum.cli.config import merge_config, style_defaults
from gum.cli.exit_codes import ExitCode
from gum.cli.output import console, parse_color, parse_spacing
from gum.exceptions import AbortedError, StyleError

Alignment = Literal["left", "center", "right"]

BORDERS = {
    "normal": box.SQUARE,
    "rounded": box.ROUNDED,
    "thick": box.HEAVY,
    "double": box.DOUBLE,
    "hidden": box.Box("    \n" * 8),
}


def _pad_line(line: str, width: int, align: Alignment) -> str:
    gap = max(width - cell_len(line), 0)
    if align == "right":
        return " " * gap + line
    if align == "center":
        left = gap // 2
        return " " * left + line + " " * (gap - left)
    return line + " " * gap


def join_blocks(blocks: list[str], horizontal: bool = False, align: Alignment = "left") -> str:
    """Join text blocks, padding lines to a common width.

    Vertical joins align every line within the widest block. Horizontal
    joins place blocks side by side, filling shorter blocks with blank
    lines at the bottom.

    Args:
        blocks: Multi-line text blocks
        horizontal: Place blocks side by side instead of stacking them
        align: Alignment of narrower lines

    Returns:
        The joined text, without a trailing newline

    Example:
        >>> join_blocks(["a\\nbb", "ccc"], horizontal=True)
        'a ccc\\nbb   '
    """
    if not blocks:
        return ""

    split = [block.split("\n") for block in blocks]

    if not horizontal:
        width = max(cell_len(line) for lines in split for line in lines)
        return "\n".join(_pad_line(line, width, align) for lines in split for line in lines)

    height = max(len(lines) for lines in split)
    columns = []
    for lines in split:
        width = max(cell_len(line) for line in lines)
        padded = lines + [""] * (height - len(lines))
        columns.append([_pad_line(line, width, align) for line in padded])
    return "\n".join("".join(row) for row in zip(*columns))


def style(
    text: Annotated[list[str], Parameter(help="Text to style (one block per argument)")],
    foreground: Annotated[str | None, Parameter(help="Foreground colour")] = None,
    background: Annotated[str | None, Parameter(help="Background colour")] = None,
    bold: Annotated[bool, Parameter(help="Bold text")] = False,
    italic: Annotated[bool, Parameter(help="Italicize text")] = False,
    underline: Annotated[bool | None, Parameter(help="Underline text")] = None,
    margin: Annotated[str | None, Parameter(help="Margin around the text (e.g. \"1 2\")")] = None,
    padding: Annotated[str | None, Parameter(help="Padding inside the border (e.g. \"1 2\")")] = None,
    border: Annotated[str, Parameter(help="Border style (none, normal, rounded, thick, double, hidden)")] = "none",
    border_foreground: Annotated[str | None, Parameter(help="Border colour")] = None,
    align: Annotated[Alignment, Parameter(help="Text alignment")] = "left",
    width: Annotated[int | None, Parameter(help="Text width")] = None,
) -> int:
    """Apply colours, borders and spacing to text.

    Unset colour, spacing and underline options fall back to the style
    defaults (see gum.cli.config).

    Returns:
        Exit code (0 for success)

    Raises:
        StyleError: If a colour, spacing or border value is invalid
    """
    opts = merge_config(
        style_defaults(),
        foreground=foreground,
        background=background,
        margin=margin,
        padding=padding,
        underline=underline,
    )

    text_style = Style(
        color=parse_color(opts["foreground"], "foreground"),
        bgcolor=parse_color(opts["background"], "background"),
        bold=bold or None,
        italic=italic or None,
        underline=bool(opts["underline"]) or None,
    )

    content = Text("\n".join(text), style=text_style, justify=align)
    if width is not None:
        if width < 1:
            raise StyleError("Invalid width", option="width", value=width)
        content = Align(content, align=align, width=width)

    inner = parse_spacing(opts["padding"], "padding")
    if border == "none":
        renderable = Padding(content, inner, style=text_style, expand=False)
    elif border in BORDERS:
        renderable = Panel(
            content,
            box=BORDERS[border],
            padding=inner,
            expand=False,
            border_style=parse_color(border_foreground, "border-foreground") or "",
        )
    else:
        raise StyleError("Invalid border", option="border", value=border, choices=["none", *BORDERS])

    outer = parse_spacing(opts["margin"], "margin")
    console.print(Padding(renderable, outer, expand=False), soft_wrap=width is None)
    return ExitCode.SUCCESS


def join(
    text: Annotated[list[str], Parameter(help="Text blocks to join")],
    horizontal: Annotated[bool, Parameter(help="Join blocks side by side")] = False,
    align: Annotated[Alignment, Parameter(help="Alignment of narrower lines")] = "left",
) -> int:
    """Join blocks of text vertically or horizontally.

    Returns:
        Exit code (0 for success)
    """
    print(join_blocks(text, horizontal=horizontal, align=align))
    return ExitCode.SUCCESS


def confirm(
    prompt: Annotated[str, Parameter(help="Question to ask")] = "Are you sure?",
    affirmative: Annotated[str, Parameter(help="Label of the affirmative answer")] = "Yes",
    negative: Annotated[str, Parameter(help="Label of the negative answer")] = "No",
    default: Annotated[bool, Parameter(help="Answer chosen on empty input")] = True,
) -> int:
    """Ask a yes/no question.

    Returns:
        0 when the user confirms, 1 when they decline

    Raises:
        AbortedError: If the user presses Ctrl+C or closes input
    """
    try:
        answer = Prompt.ask(
            prompt,
            console=console,
            choices=[affirmative, negative],
            default=affirmative if default else negative,
            case_sensitive=False,
        )
    except (KeyboardInterrupt, EOFError) as e:
        raise AbortedError() from e

    if answer.lower() == affirmative.lower():
        return ExitCode.SUCCESS
    return ExitCode.ERROR


def input_(
    prompt: Annotated[str, Parameter(help="Prompt shown before the input")] = "> ",
    placeholder: Annotated[str, Parameter(help="Hint shown in the prompt")] = "Type something...",
    value: Annotated[str | None, Parameter(help="Initial value, used on empty input")] = None,
    password: Annotated[bool, Parameter(help="Mask input characters")] = False,
) -> int:
    """Prompt for a single line of input and print it.

    Returns:
        Exit code (0 for success)

    Raises:
        AbortedError: If the user presses Ctrl+C or closes input
    """
    label = Text(prompt)
    if placeholder and not value:
        label.append(f"({placeholder}) ", style="dim")

    try:
        answer = Prompt.ask(
            label,
            console=console,
            password=password,
            default=value,
            show_default=not password and value is not None,
        )
    except (KeyboardInterrupt, EOFError) as e:
        raise AbortedError() from e

    print(answer if answer is not None else "")
    return ExitCode.SUCCESS
