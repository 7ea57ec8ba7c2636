"""Generator configuration: defaults, optional YAML file, CLI overrides."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Final, Mapping

import yaml

from .errors import ConfigError

DEFAULT_DATABASE: Final[str] = "model"
DEFAULT_PACKAGE: Final[str] = "model"
DEFAULT_FORMATTER: Final[tuple[str, ...]] = ("go", "fmt")


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Resolved settings for a generation run."""

    database: str = DEFAULT_DATABASE
    output: str = ""
    package: str | None = None
    formatter: tuple[str, ...] = DEFAULT_FORMATTER
    format: bool = True
    strict_types: bool = True

    @property
    def package_name(self) -> str:
        """Go package clause; falls back to the database name, then ``model``."""
        if self.package:
            return self.package
        return self.database or DEFAULT_PACKAGE


_KEY_TYPES: Final[dict[str, type | tuple[type, ...]]] = {
    "database": str,
    "output": str,
    "package": str,
    "formatter": (str, list),
    "format": bool,
    "strict_types": bool,
}


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a configuration mapping from a YAML file.

    Args:
        config_path: Path to the config file.

    Returns:
        The parsed mapping, or an empty dict for an empty file.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}", str(config_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", str(config_path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping", str(config_path))

    return data


def _validate(data: Mapping[str, Any], source: str | None) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key, value in data.items():
        expected = _KEY_TYPES.get(key)
        if expected is None:
            raise ConfigError("unknown option", source, key=str(key))
        if value is None and key == "package":
            continue
        if not isinstance(value, expected):
            raise ConfigError(f"unexpected value {value!r}", source, key=key)
        if key == "formatter":
            if isinstance(value, list) and not all(isinstance(v, str) for v in value):
                raise ConfigError("formatter arguments must be strings", source, key=key)
            argv = shlex.split(value) if isinstance(value, str) else list(value)
            if not argv:
                raise ConfigError("formatter command is empty", source, key=key)
            value = tuple(argv)
        values[key] = value
    return values


def resolve_config(
    config_path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> GeneratorConfig:
    """Build a GeneratorConfig from the optional file and CLI overrides.

    Overrides whose value is None are treated as not given.
    """
    config = GeneratorConfig()
    if config_path is not None:
        file_values = _validate(load_config(config_path), str(config_path))
        config = replace(config, **file_values)

    if overrides:
        known = {f.name for f in fields(GeneratorConfig)}
        given = {k: v for k, v in overrides.items() if v is not None and k in known}
        config = replace(config, **_validate(given, None))

    return config
