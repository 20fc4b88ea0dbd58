"""
Profile configuration for fimov.

Loads the JSON file mapping keywords to source/destination path pairs and
checks that a profile's directories exist.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigParseError, ConfigReadError, PathNotFoundError, UnknownKeywordError
from .utils import load_json

# Config file looked up in the current working directory
DEFAULT_CONFIG_NAME = ".fimov.json"

# Environment variable overriding the config file location
CONFIG_ENV_VAR = "FIMOV_CONFIG"


@dataclass(frozen=True)
class PathConfig:
    """A source/destination directory pair selected by a keyword."""
    source: str
    destination: str

    @classmethod
    def from_dict(cls, keyword: str, data: dict) -> "PathConfig":
        """Create a PathConfig from one profile of the JSON config."""
        if not isinstance(data, dict):
            raise ConfigParseError(f"profile '{keyword}' must be an object")

        fields = {}
        for field in ("source", "destination"):
            value = data.get(field)
            if not isinstance(value, str):
                raise ConfigParseError(f"profile '{keyword}' needs a string '{field}'")
            fields[field] = os.path.expanduser(value)

        return cls(**fields)


def resolve_config_path(cli_path: Path | None = None) -> Path:
    """
    Pick the configuration file to read.

    Args:
        cli_path: Path given with --config, if any.

    Returns:
        --config, then $FIMOV_CONFIG, then ./.fimov.json.
    """
    if cli_path is not None:
        return cli_path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    return Path(DEFAULT_CONFIG_NAME)


def load_config(path: Path) -> dict[str, PathConfig]:
    """
    Read and parse the keyword -> PathConfig mapping.

    Args:
        path: The JSON configuration file.

    Returns:
        Mapping of keyword to its PathConfig.

    Raises:
        ConfigReadError: If the file cannot be read.
        ConfigParseError: If the content is not a JSON object of profiles.
    """
    try:
        content = load_json(path)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"invalid JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"{path} is not UTF-8 text: {e}") from e
    except OSError as e:
        raise ConfigReadError(f"cannot read {path}: {e.strerror or e}") from e

    if not isinstance(content, dict):
        raise ConfigParseError(f"{path} must contain a JSON object of profiles")

    return {keyword: PathConfig.from_dict(keyword, data) for keyword, data in content.items()}


def get_profile(config: dict[str, PathConfig], keyword: str) -> PathConfig:
    """Look up the profile for `keyword`, raising UnknownKeywordError if absent."""
    try:
        return config[keyword]
    except KeyError:
        known = ", ".join(sorted(config)) or "none"
        raise UnknownKeywordError(f"Error: unknown keyword {keyword} (known keywords: {known})") from None


def validate_paths(conf: PathConfig) -> None:
    """
    Confirm that both directories of a profile exist.

    Only existence is checked, not permissions or whether the path is a directory.

    Raises:
        PathNotFoundError: Naming the missing path.
    """
    if not os.path.exists(conf.source):
        raise PathNotFoundError(f"source path does not exist: {conf.source}")

    if not os.path.exists(conf.destination):
        raise PathNotFoundError(f"destination path does not exist: {conf.destination}")
