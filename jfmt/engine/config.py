"""
Configuration management for the jfmt engine.

The engine itself only ever sees a resolved, immutable Configuration value.
This module also hosts the loader used by the command line: it walks up from
a starting directory looking for a jfmt YAML or TOML file and applies
defaults for any key the file leaves out.
"""

import logging
import os
import sys
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import yaml

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ["jfmt.yml", "jfmt.yaml", ".jfmt.yml", "jfmt.toml"]

DEFAULT_INDENT_WIDTH = 4
DEFAULT_MAX_LINE_LENGTH = 100


class IndentStyle(str, Enum):
    TABS = "tabs"
    SPACES = "spaces"


@dataclass(frozen=True)
class Configuration:
    """Resolved settings shared read-only by every rule of a run."""

    indent_style: IndentStyle = IndentStyle.SPACES
    indent_width: int = DEFAULT_INDENT_WIDTH
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH

    def __post_init__(self):
        style = self.indent_style
        if not isinstance(style, IndentStyle):
            try:
                style = IndentStyle(str(style).lower())
            except ValueError:
                raise ConfigError(
                    f"indent_style must be 'tabs' or 'spaces', got {self.indent_style!r}"
                ) from None
            object.__setattr__(self, 'indent_style', style)

        for name in ("indent_width", "max_line_length"):
            value = getattr(self, name)
            # bool is an int subclass but never a meaningful width
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Configuration":
        """Build a Configuration from a parsed key-value document."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"configuration must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(map(str, unknown))}")
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "indent_style": self.indent_style.value,
            "indent_width": self.indent_width,
            "max_line_length": self.max_line_length,
        }


def get_default_config() -> Configuration:
    """Get default configuration without loading from file."""
    return Configuration()


def find_config_file(start_path: str = ".") -> Optional[str]:
    """
    Find configuration file by walking up the directory tree.

    Looks in each directory for, in order: jfmt.yml, jfmt.yaml, .jfmt.yml,
    jfmt.toml

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to config file or None if not found
    """
    current_path = os.path.abspath(start_path)
    if os.path.isfile(current_path):
        current_path = os.path.dirname(current_path)

    while True:
        for config_name in CONFIG_FILE_NAMES:
            config_path = os.path.join(current_path, config_name)
            if os.path.isfile(config_path):
                return config_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            # Reached the root directory
            break
        current_path = parent_path

    return None


def load_config(config_path: Optional[str] = None) -> Configuration:
    """
    Load configuration from a YAML or TOML file, or return defaults.

    Files ending in .toml are read as TOML, anything else as YAML.

    Raises:
        ConfigError: if the file cannot be read, cannot be parsed, or holds
            invalid values
    """
    if not config_path:
        return get_default_config()

    try:
        if config_path.endswith(".toml"):
            with open(config_path, 'rb') as f:
                file_config = tomllib.load(f)
        else:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"could not read {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML in {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {config_path}: {e}") from e

    try:
        config = Configuration.from_mapping(file_config)
    except ConfigError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    logger.debug("Loaded configuration from %s: %s", config_path, config.to_dict())
    return config


def load_config_from(start_path: str = ".") -> Configuration:
    """Find the nearest configuration file above start_path and load it."""
    return load_config(find_config_file(start_path))
