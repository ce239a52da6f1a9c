"""
Alert processing - per-tick alert dispatch and the detection session loop.
"""

from .alert_dispatcher import (
    HAPTIC_BY_SEVERITY,
    AlertDispatcher,
    format_alert_message,
    format_distance,
)
from .session import DetectionSession

__all__ = [
    "HAPTIC_BY_SEVERITY",
    "AlertDispatcher",
    "DetectionSession",
    "format_alert_message",
    "format_distance",
]
