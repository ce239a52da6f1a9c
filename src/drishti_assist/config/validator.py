"""
Configuration Validator - Validates config syntax and semantic correctness.

Provides comprehensive validation with detailed error messages.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from ..vocabulary import VOCABULARIES, normalize_locale_code
from .schemas import validate_config_pydantic

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of config validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    derived: dict[str, Any] = field(default_factory=dict)


def validate_config_full(config: dict) -> ValidationResult:
    """
    Comprehensive config validation with detailed error messages.

    Corrections the schema applies silently (clamped sensitivity, locale
    fallback) are reported as warnings.

    Args:
        config: Configuration dictionary to validate

    Returns:
        ValidationResult with errors, warnings, and derived settings
    """
    result = ValidationResult(valid=True)

    if not isinstance(config, dict):
        result.valid = False
        result.errors.append("Config root must be a mapping")
        return result

    _check_corrections(config, result)

    try:
        parsed = validate_config_pydantic(config)
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "config"
            result.errors.append(f"{location}: {error['msg']}")
        result.valid = False
        return result

    if parsed.alerts.muted:
        result.warnings.append("alerts.muted is set - no obstacle alerts will be spoken")
    if parsed.alerts.cooldown_ms == 0:
        result.warnings.append("alerts.cooldown_ms is 0 - the same obstacle may be announced every tick")

    result.derived["sensitivity"] = parsed.session.sensitivity
    result.derived["confidence_threshold"] = round(0.3 + 0.4 * parsed.session.sensitivity, 3)
    result.derived["locale"] = parsed.speech.locale
    result.derived["outputs"] = {
        name: getattr(parsed.outputs, name).type for name in ("speech", "haptics", "router")
    }
    return result


def _check_corrections(config: dict, result: ValidationResult) -> None:
    """Warn about values the schema will correct instead of reject."""
    session = config.get("session") or {}
    sensitivity = session.get("sensitivity") if isinstance(session, dict) else None
    if isinstance(sensitivity, (int, float)) and not 0.0 <= sensitivity <= 1.0:
        result.warnings.append(f"session.sensitivity {sensitivity} will be clamped to [0, 1]")

    speech = config.get("speech") or {}
    locale = speech.get("locale") if isinstance(speech, dict) else None
    if isinstance(locale, str):
        if normalize_locale_code(locale) not in VOCABULARIES:
            result.warnings.append(f"speech.locale {locale!r} is unsupported, English will be used")


def print_validation_result(result: ValidationResult) -> None:
    """Print validation result in a readable format."""
    if result.valid:
        print("Configuration is valid")
    else:
        print("Configuration has errors:")
        for error in result.errors:
            print(f"  ERROR   {error}")

    for warning in result.warnings:
        print(f"  WARNING {warning}")

    if result.derived:
        print("\nDerived settings:")
        for key, value in result.derived.items():
            print(f"  {key}: {value}")
