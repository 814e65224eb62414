"""Property-based tests for output styling and logging setup.

This module tests universal properties of the output helpers:
- Colour parsing (ANSI 256 indices, hex, names)
- CSS-style spacing shorthand
- Markup renderers for the description text
- Logging configuration
"""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gum.cli.output import (
    configure_logging,
    parse_color,
    parse_spacing,
    print_failure,
    styled,
)
from gum.exceptions import StyleError


# Property: every ANSI 256 index becomes a rich colour
@given(index=st.integers(min_value=0, max_value=255))
def test_property_ansi_index_colors(index):
    assert parse_color(str(index)) == f"color({index})"


@pytest.mark.parametrize("value", ["#ff00ff", "red", "bright_blue"])
def test_named_and_hex_colors_pass_through(value):
    assert parse_color(value) == value


@pytest.mark.parametrize("value", ["", None])
def test_empty_color_is_none(value):
    assert parse_color(value) is None


@pytest.mark.parametrize("value", ["256", "not-a-colour", "#12345"])
def test_invalid_color(value):
    with pytest.raises(StyleError) as excinfo:
        parse_color(value, "foreground")

    assert excinfo.value.context == {"option": "foreground", "value": value}


# Property: shorthand expands like CSS
@given(numbers=st.lists(st.integers(min_value=0, max_value=20), min_size=1, max_size=4))
def test_property_spacing_shorthand(numbers):
    """Test that 1-4 values expand to (top, right, bottom, left).

    Property: one value applies everywhere; two are vertical/horizontal;
    three are top/horizontal/bottom; four are given clockwise from top.
    """
    top, right, bottom, left = parse_spacing(" ".join(str(n) for n in numbers))

    expanded = {
        1: lambda n: (n[0], n[0], n[0], n[0]),
        2: lambda n: (n[0], n[1], n[0], n[1]),
        3: lambda n: (n[0], n[1], n[2], n[1]),
        4: lambda n: tuple(n),
    }[len(numbers)](numbers)
    assert (top, right, bottom, left) == expanded


@pytest.mark.parametrize("value", ["", "1 2 3 4 5", "1 x", "-1", "1.5"])
def test_invalid_spacing(value):
    with pytest.raises(StyleError, match="Invalid margin"):
        parse_spacing(value, "margin")


def test_styled_renders_markup():
    assert styled("212")("glamorous") == "[color(212)]glamorous[/color(212)]"


def test_styled_escapes_markup():
    assert styled("212")("[b]") == "[color(212)]\\[b][/color(212)]"


def test_print_failure_writes_stdout(capsys):
    print_failure("boom")

    captured = capsys.readouterr()
    assert captured.out == "boom\n"
    assert captured.err == ""


class TestConfigureLogging:
    """Test log level configuration."""

    @pytest.fixture(autouse=True)
    def reset_gum_logger(self):
        logger = logging.getLogger("gum")
        handlers, level = list(logger.handlers), logger.level
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)

    @pytest.mark.parametrize(
        "name, level",
        [("debug", logging.DEBUG), ("INFO", logging.INFO), ("error", logging.ERROR)],
    )
    def test_level_from_env(self, name, level):
        configure_logging(env={"GUM_LOG_LEVEL": name})

        assert logging.getLogger("gum").level == level

    def test_default_is_warning(self):
        configure_logging(env={})

        assert logging.getLogger("gum").level == logging.WARNING

    def test_unknown_level_falls_back(self):
        configure_logging("chatty", env={})

        assert logging.getLogger("gum").level == logging.WARNING

    def test_handler_installed_once(self):
        configure_logging(env={})
        configure_logging(env={})

        installed = [h for h in logging.getLogger("gum").handlers if getattr(h, "_gum_handler", False)]
        assert len(installed) == 1
