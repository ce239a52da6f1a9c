"""
Configuration loading and validation.

- load_config: find, read and validate the YAML config
- load_config_with_env: apply environment variable overrides
- validate_config_full: comprehensive validation with errors/warnings
"""

from .loader import (
    ConfigValidationError,
    find_config_file,
    load_config,
    load_config_with_env,
    read_config_file,
)
from .schemas import (
    AlertsConfig,
    Config,
    OutputConfig,
    OutputsConfig,
    SessionConfig,
    SpeechConfig,
    VoiceConfig,
    validate_config_pydantic,
)
from .validator import ValidationResult, print_validation_result, validate_config_full

__all__ = [
    "AlertsConfig",
    "Config",
    "ConfigValidationError",
    "OutputConfig",
    "OutputsConfig",
    "SessionConfig",
    "SpeechConfig",
    "ValidationResult",
    "VoiceConfig",
    "find_config_file",
    "load_config",
    "load_config_with_env",
    "print_validation_result",
    "read_config_file",
    "validate_config_full",
    "validate_config_pydantic",
]
