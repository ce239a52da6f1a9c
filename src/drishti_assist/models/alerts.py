"""
Alert data models - throttle state, haptic patterns, voice parameters.
"""

from dataclasses import dataclass
from enum import Enum

from .detection import ObstacleCategory, Severity


class HapticPattern(str, Enum):
    """Pulse patterns understood by the haptic collaborator."""

    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    DOUBLE_HEAVY = "doubleHeavy"


@dataclass(frozen=True)
class VoiceParams:
    """Locale-appropriate parameters passed with every utterance."""

    language_tag: str
    rate: float = 0.9
    pitch: float = 1.0


@dataclass
class AlertThrottleState:
    """
    Per-session alert memory.

    Created when a detection session starts and cleared when it stops.
    Only the alert dispatcher mutates it.
    """

    last_alert_at: float | None = None
    last_category: ObstacleCategory | None = None

    def allows(self, category: ObstacleCategory, now: float, cooldown_s: float) -> bool:
        """
        Check whether a new spoken alert may fire.

        A different category always interrupts the cooldown; the same category
        has to wait until the cooldown has elapsed.
        """
        if self.last_alert_at is None:
            return True
        if category != self.last_category:
            return True
        return now - self.last_alert_at >= cooldown_s

    def mark(self, category: ObstacleCategory, now: float) -> None:
        self.last_alert_at = now
        self.last_category = category

    def clear(self) -> None:
        self.last_alert_at = None
        self.last_category = None


@dataclass(frozen=True)
class Alert:
    """A spoken/haptic alert produced for the closest detection."""

    message: str
    category: ObstacleCategory
    severity: Severity
    distance_m: float
    haptic: HapticPattern | None


@dataclass(frozen=True)
class AlertOutcome:
    """
    Result of one dispatch.

    Attributes:
        status: Worst severity in the tick's list (None when the list is empty)
        alert: The alert that fired, or None
        reason: Why nothing fired ("empty", "muted", "throttled"), None if fired
    """

    status: Severity | None
    alert: Alert | None = None
    reason: str | None = None

    @property
    def fired(self) -> bool:
        return self.alert is not None
