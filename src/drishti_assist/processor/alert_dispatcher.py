"""
Alert Dispatcher

Turns each tick's ranked detection list into at most one spoken alert plus a
haptic pulse. Only the closest detection is announced, under a cooldown:

- no previous alert            -> fire
- different category than last -> fire (a new hazard interrupts the cooldown)
- same category                -> fire only once the cooldown has elapsed

Speech and haptic failures are swallowed so the tick loop always continues.
"""

import logging
import time
from collections.abc import Callable

from ..core.severity import classify_severity, worst_severity
from ..models import Alert, AlertOutcome, AlertThrottleState, Detection, HapticPattern, Severity
from ..outputs import HapticOutput, VoiceOutput, safe_pulse
from ..utils.constants import DEFAULT_ALERT_COOLDOWN_MS
from ..vocabulary import LocaleVocabulary, get_vocabulary

logger = logging.getLogger(__name__)

HAPTIC_BY_SEVERITY: dict[Severity, HapticPattern | None] = {
    Severity.DANGER: HapticPattern.DOUBLE_HEAVY,
    Severity.WARNING: HapticPattern.MEDIUM,
    Severity.SAFE: None,
}


def format_distance(distance_m: float, vocab: LocaleVocabulary) -> str:
    """Spoken distance phrase; anything under a meter is 'less than one meter'."""
    if distance_m < 1.0:
        return vocab.distance_near
    return vocab.distance_template.format(value=f"{distance_m:.1f}")


def format_alert_message(detection: Detection, locale: str) -> str:
    """Build the locale-specific alert text for a detection."""
    vocab = get_vocabulary(locale)
    severity = classify_severity(detection.distance_m)
    message = vocab.alert_templates[severity].format(
        object=vocab.label(detection.category),
        distance=format_distance(detection.distance_m, vocab),
    )
    return message[:1].upper() + message[1:]


class AlertDispatcher:
    """
    Decides whether and what to announce for a tick.

    The throttle state is owned by the caller's session and passed in, so one
    dispatcher can serve independent sessions.
    """

    def __init__(
        self,
        voice: VoiceOutput,
        haptics: HapticOutput | None = None,
        cooldown_ms: int = DEFAULT_ALERT_COOLDOWN_MS,
        muted: bool = False,
        haptic_enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.voice = voice
        self.haptics = haptics
        self.cooldown_s = cooldown_ms / 1000.0
        self.muted = muted
        self.haptic_enabled = haptic_enabled
        self._clock = clock

    def dispatch(
        self,
        detections: list[Detection],
        throttle: AlertThrottleState,
        locale: str,
    ) -> AlertOutcome:
        """
        Handle one tick's detection list.

        Args:
            detections: Ranked list, closest first
            throttle: The session's throttle state (mutated when an alert fires)
            locale: Locale code for the message

        Returns:
            AlertOutcome with the dominant status and the alert, if one fired
        """
        status = worst_severity(detections)
        if not detections:
            return AlertOutcome(status=None, reason="empty")
        if self.muted:
            return AlertOutcome(status=status, reason="muted")

        top = detections[0]
        now = self._clock()
        if not throttle.allows(top.category, now, self.cooldown_s):
            logger.debug(f"Alert throttled: {top.category.value} at {top.distance_m}m")
            return AlertOutcome(status=status, reason="throttled")

        severity = classify_severity(top.distance_m)
        alert = Alert(
            message=format_alert_message(top, locale),
            category=top.category,
            severity=severity,
            distance_m=top.distance_m,
            haptic=HAPTIC_BY_SEVERITY[severity],
        )

        # Mark as alerted before delivery (optimistic)
        throttle.mark(top.category, now)

        logger.info(f"Alert ({severity.value}): {alert.message}")
        self.voice.say(alert.message, locale)
        if alert.haptic is not None and self.haptic_enabled:
            safe_pulse(self.haptics, alert.haptic)

        return AlertOutcome(status=status, alert=alert)
