"""Style defaults and configuration file loading.

This module holds the named defaults used by ``gum style`` and loads
overrides for them from a JSON or YAML file named by the ``GUM_CONFIG``
environment variable. Per-flag environment variables such as
``GUM_STYLE_FOREGROUND`` are handled by cyclopts and take precedence over
both.

A configuration file looks like:

    style:
      foreground: "212"
      padding: "1 2"
      underline: false
"""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from gum.exceptions import ConfigError

CONFIG_ENV_VAR = "GUM_CONFIG"

STYLE_DEFAULTS: dict[str, Any] = {
    "background": "",
    "foreground": "",
    "margin": "0 0",
    "padding": "0 0",
    "underline": False,
}
"""Named defaults for ``gum style``: no colours, no spacing, no underline."""


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from JSON or YAML file.

    Format is determined by file extension (.json, .yaml, .yml) or
    auto-detected when the extension is ambiguous.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        ConfigError: If file cannot be loaded, parsed, or is not a mapping

    Example:
        >>> from pathlib import Path
        >>> from gum.cli.config import load_config
        >>>
        >>> config = load_config(Path("gum.yaml"))
        >>> print(config["style"]["foreground"])  # "212"
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        content = path.read_text()

        if path.suffix == ".json":
            data = json.loads(content)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping")
    return data


def merge_config(base: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Merge overrides into base configuration.

    Only non-None override values are applied, so unset CLI flags leave the
    base values in place.

    Args:
        base: Base configuration
        **overrides: Values taking precedence over ``base``

    Returns:
        Merged configuration dictionary

    Example:
        >>> merge_config({"margin": "0 0", "padding": "0 0"}, padding="1 2")
        {'margin': '0 0', 'padding': '1 2'}
    """
    merged = base.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def _coerce_style_value(key: str, value: Any, path: Path) -> Any:
    """Coerce a style default from a configuration file to its expected type.

    Unquoted YAML numbers such as ``foreground: 212`` become strings, and
    underline accepts a bool or the strings "true" and "false".

    Raises:
        ConfigError: If the value has any other type
    """
    if key == "underline":
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
    elif isinstance(value, str):
        return value
    elif isinstance(value, int) and not isinstance(value, bool):
        return str(value)

    expected = "a bool" if key == "underline" else "a string"
    raise ConfigError(
        f"Invalid style default '{key}' in {path}: expected {expected}",
        {"value": value},
    )


def style_defaults(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Return the style defaults, merged with the configuration file if any.

    Args:
        env: Environment to read ``GUM_CONFIG`` from (defaults to os.environ)

    Returns:
        Dictionary with the keys of STYLE_DEFAULTS

    Raises:
        ConfigError: If the file is invalid or its ``style`` table holds
            unknown keys or values of the wrong type
    """
    env = os.environ if env is None else env
    config_path = env.get(CONFIG_ENV_VAR)
    if not config_path:
        return dict(STYLE_DEFAULTS)

    path = Path(config_path).expanduser()
    style = load_config(path).get("style") or {}
    if not isinstance(style, dict):
        raise ConfigError(f"'style' in {path} must be a mapping")

    unknown = sorted(set(style) - set(STYLE_DEFAULTS))
    if unknown:
        raise ConfigError(
            f"Unknown style defaults in {path}: {', '.join(unknown)}",
            {"known": sorted(STYLE_DEFAULTS)},
        )

    return merge_config(
        STYLE_DEFAULTS,
        **{key: _coerce_style_value(key, value, path) for key, value in style.items()},
    )
