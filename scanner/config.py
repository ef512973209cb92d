"""Resolver conventions and the loader for optional config files."""

import json
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml


DEFAULT_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs")

# Table name looked up first when a config file holds settings for other tools
CONFIG_SECTION = "fileweaver"


class ConfigError(ValueError):
    """Raised when a config file cannot be read or holds invalid settings."""


@dataclass(frozen=True)
class ResolverConfig:
    """
    Conventions used when resolving local references.

    `alias_prefix` references are resolved under
    `<project root>/<alias_target_subdir>`, where the project root is the
    nearest ancestor holding `marker_file_name` (searched at most
    `max_root_search_levels` levels up). `extensions` is the probe order,
    and the first existing candidate wins.
    """

    alias_prefix: str = "@/"
    alias_target_subdir: str = "src"
    marker_file_name: str = "package.json"
    max_root_search_levels: int = 10
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS


DEFAULT_CONFIG = ResolverConfig()


def load_config(path: Union[str, Path]) -> ResolverConfig:
    """
    Load a ResolverConfig from a YAML, TOML or JSON file.

    Missing keys keep their defaults.

    Raises:
        ConfigError: If the file can't be read or parsed, or holds unknown
            keys or values of the wrong type.
    """
    path = Path(path)
    data = _parse_config_file(path)

    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: '{CONFIG_SECTION}' must be a mapping")

    return config_from_mapping(section, source=str(path))


def config_from_mapping(values: Dict[str, Any], source: str = "<config>") -> ResolverConfig:
    """Build a ResolverConfig from a plain mapping, validating every key."""
    known = {f.name for f in fields(ResolverConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"{source}: unknown setting(s): {', '.join(unknown)}")

    updates: Dict[str, Any] = {}
    for key, value in values.items():
        if key == "extensions":
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise ConfigError(f"{source}: 'extensions' must be a list of strings")
            if not all(isinstance(ext, str) and ext for ext in value):
                raise ConfigError(f"{source}: 'extensions' must be a list of strings")
            updates[key] = tuple(ext if ext.startswith(".") else "." + ext for ext in value)
        elif key == "max_root_search_levels":
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"{source}: 'max_root_search_levels' must be a non-negative integer")
            updates[key] = value
        else:
            if not isinstance(value, str) or not value:
                raise ConfigError(f"{source}: '{key}' must be a non-empty string")
            updates[key] = value

    return replace(DEFAULT_CONFIG, **updates)


def _parse_config_file(path: Path) -> Optional[Any]:
    """Parse a config file according to its suffix."""
    suffix = path.suffix.lower()

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)
        elif suffix == ".toml":
            return tomllib.loads(content)
        elif suffix == ".json":
            return json.loads(content)
        else:
            raise ConfigError(f"Unsupported config file type: {path.name}")
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e
