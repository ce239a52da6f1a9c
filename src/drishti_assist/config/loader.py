"""
Configuration Loader - finds, reads and validates the YAML config.

Search order:
1. Explicit path (must exist)
2. ./drishti.yaml
3. ~/.config/drishti/drishti.yaml
4. Built-in defaults

A file containing only `use: path/to/other.yaml` is followed, relative to the
pointer file's directory. Environment variables override file values.
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.constants import ENV_LOCALE, ENV_MUTED, ENV_SENSITIVITY
from .schemas import Config, validate_config_pydantic

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "drishti.yaml"


class ConfigValidationError(Exception):
    """Raised when config cannot be read or fails validation."""


def find_config_file(config_path: str | None = None) -> Path | None:
    """
    Find a config file in the standard locations.

    Raises:
        ConfigValidationError: If an explicit path does not exist
    """
    if config_path:
        specified = Path(config_path)
        if not specified.exists():
            raise ConfigValidationError(f"Specified config file not found: {config_path}")
        return specified

    search_paths = [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.home() / ".config" / "drishti" / DEFAULT_CONFIG_NAME,
    ]
    for path in search_paths:
        if path.exists():
            logger.info(f"Using config: {path}")
            return path

    logger.info("No config file found, using defaults")
    return None


def read_config_file(config_file: Path) -> dict:
    """Read YAML, following a `use:` pointer file."""
    try:
        with open(config_file, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        if isinstance(config, dict) and list(config.keys()) == ["use"]:
            pointer_path = Path(config_file).parent / config["use"]
            logger.info(f"Config pointer: {config_file} -> {config['use']}")
            with open(pointer_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}

    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigValidationError(f"Cannot read {config_file}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigValidationError(f"Config root must be a mapping: {config_file}")
    return config


def _section(config: dict, name: str) -> dict:
    """Return a config section, creating it when missing or empty."""
    if not isinstance(config.get(name), dict):
        config[name] = {}
    return config[name]


def load_config_with_env(config: dict) -> dict:
    """
    Apply environment variable overrides to config.

    Args:
        config: Base configuration dictionary

    Returns:
        Configuration with environment variables applied
    """
    if ENV_LOCALE in os.environ:
        logger.info(f"Using locale from environment: {ENV_LOCALE}")
        _section(config, "speech")["locale"] = os.environ[ENV_LOCALE]

    if ENV_SENSITIVITY in os.environ:
        raw = os.environ[ENV_SENSITIVITY]
        try:
            _section(config, "session")["sensitivity"] = float(raw)
            logger.info(f"Using sensitivity from environment: {ENV_SENSITIVITY}")
        except ValueError:
            logger.warning(f"Ignoring non-numeric {ENV_SENSITIVITY}={raw!r}")

    if ENV_MUTED in os.environ:
        muted = os.environ[ENV_MUTED].strip().lower() in ("1", "true", "yes", "on")
        _section(config, "alerts")["muted"] = muted

    return config


def load_config(config_path: str | None = None) -> Config:
    """
    Load, override and validate configuration.

    Raises:
        ConfigValidationError: If the file is unreadable or invalid
    """
    config_file = find_config_file(config_path)
    raw = read_config_file(config_file) if config_file else {}
    raw = load_config_with_env(raw)

    try:
        config = validate_config_pydantic(raw)
    except ValidationError as e:
        raise ConfigValidationError(str(e)) from e

    logger.info(f"Configuration loaded from {config_file or 'defaults'}")
    return config
