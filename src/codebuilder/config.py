"""
Builder configuration.

The indentation unit is per-builder, never process-wide. A builder copies
its unit from the BuilderConfig it is constructed with, and finalize() can
override it for a single call.

Configuration can be kept in YAML:

    indentation: "    "
    initial_indent: 1
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict

import yaml

from codebuilder.errors import ConfigError


DEFAULT_INDENTATION = "\t"


@dataclass(frozen=True)
class BuilderConfig:
    """
    Settings a CodeBuilder reads at construction.

    Properties:
        indentation: Unit string repeated once per depth level
        initial_indent: Starting depth (indent_base), must be >= 0
    """

    indentation: str = DEFAULT_INDENTATION
    initial_indent: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.indentation, str):
            raise ConfigError(f"indentation must be a string, got {type(self.indentation).__name__}")
        if isinstance(self.initial_indent, bool) or not isinstance(self.initial_indent, int):
            raise ConfigError(f"initial_indent must be an integer, got {self.initial_indent!r}")
        if self.initial_indent < 0:
            raise ConfigError(f"initial_indent can never be less than 0, got {self.initial_indent}")


def config_from_dict(d: Dict[str, Any] | None) -> BuilderConfig:
    if not d:
        return BuilderConfig()
    if not isinstance(d, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(d).__name__}")
    known = {f.name for f in fields(BuilderConfig)}
    unknown = set(d) - known
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")
    return BuilderConfig(**d)


def config_to_dict(config: BuilderConfig) -> Dict[str, Any]:
    return {"indentation": config.indentation, "initial_indent": config.initial_indent}


def config_from_yaml(s: str) -> BuilderConfig:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid configuration YAML: {e}") from e
    return config_from_dict(d)


def load_config(path: str) -> BuilderConfig:
    """
    Read a BuilderConfig from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        BuilderConfig (defaults for an empty file)

    Raises:
        ConfigError: If the content is not a valid configuration
    """
    with open(path) as fh:
        return config_from_yaml(fh.read())
