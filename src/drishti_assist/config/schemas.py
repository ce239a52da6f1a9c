"""
Pydantic schemas for configuration validation.

Provides type-safe, declarative validation with clear error messages.
Out-of-range sensitivity and unknown locales are corrected (with a warning)
rather than rejected.
"""

import logging
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.constants import (
    DEFAULT_ALERT_COOLDOWN_MS,
    DEFAULT_AUTO_ACTIVATE_DELAY_MS,
    DEFAULT_LOCALE,
    DEFAULT_TICK_INTERVAL_MS,
    DEFAULT_VOICE_SPEED,
)
from ..vocabulary import resolve_locale

logger = logging.getLogger(__name__)


class StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def drop_empty_values(cls, data):
        # An empty YAML key (`session:`) parses as None and means "use the default"
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class SessionConfig(StrictModel):
    """Detection loop settings."""

    sensitivity: float = Field(default=0.5, description="Alert sensitivity, 0 = low, 1 = high")
    tick_interval_ms: int = Field(default=DEFAULT_TICK_INTERVAL_MS, gt=0)
    seed: int | None = Field(default=None, description="Fixed seed for repeatable runs")

    @field_validator("sensitivity")
    @classmethod
    def clamp_sensitivity(cls, v: float) -> float:
        if v < 0.0 or v > 1.0:
            logger.warning(f"sensitivity {v} out of range, clamping to [0, 1]")
        return min(1.0, max(0.0, v))


class AlertsConfig(StrictModel):
    """Obstacle alert settings."""

    muted: bool = False
    cooldown_ms: int = Field(default=DEFAULT_ALERT_COOLDOWN_MS, ge=0)
    haptic_enabled: bool = True


class SpeechConfig(StrictModel):
    """Speech settings."""

    locale: str = DEFAULT_LOCALE
    voice_speed: float = Field(default=DEFAULT_VOICE_SPEED, gt=0, le=4)
    pitch: float = Field(default=1.0, gt=0, le=4)

    @field_validator("locale")
    @classmethod
    def normalize_locale(cls, v: str) -> str:
        return resolve_locale(v)


class VoiceConfig(StrictModel):
    """Voice command settings."""

    auto_activate: bool = True
    auto_activate_delay_ms: int = Field(default=DEFAULT_AUTO_ACTIVATE_DELAY_MS, ge=0)


class OutputConfig(StrictModel):
    """One collaborator backend."""

    type: Literal["console", "command", "null"] = "console"
    exec: str | None = None
    timeout_seconds: float = Field(default=5, gt=0)

    @model_validator(mode="after")
    def validate_exec(self):
        if self.type == "command" and not self.exec:
            raise ValueError("command outputs require 'exec'")
        return self


class OutputsConfig(StrictModel):
    """Collaborator backends."""

    speech: OutputConfig = Field(default_factory=OutputConfig)
    haptics: OutputConfig = Field(default_factory=OutputConfig)
    router: OutputConfig = Field(default_factory=OutputConfig)


class Config(StrictModel):
    """Complete configuration schema."""

    session: SessionConfig = Field(default_factory=SessionConfig)
    alerts: AlertsConfig = Field(default_factory=AlertsConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)
    voice: VoiceConfig = Field(default_factory=VoiceConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


def validate_config_pydantic(config: dict) -> Config:
    """
    Validate configuration using Pydantic.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return Config(**config)
