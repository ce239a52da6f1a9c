"""
Utility modules - constants and tick scheduling.
"""

from .constants import (
    DEFAULT_ALERT_COOLDOWN_MS,
    DEFAULT_AUTO_ACTIVATE_DELAY_MS,
    DEFAULT_LOCALE,
    DEFAULT_TICK_INTERVAL_MS,
    ENV_LOCALE,
    ENV_MUTED,
    ENV_SENSITIVITY,
)
from .scheduler import ManualScheduler, Scheduler, ThreadScheduler, TimerHandle

__all__ = [
    "DEFAULT_ALERT_COOLDOWN_MS",
    "DEFAULT_AUTO_ACTIVATE_DELAY_MS",
    "DEFAULT_LOCALE",
    "DEFAULT_TICK_INTERVAL_MS",
    "ENV_LOCALE",
    "ENV_MUTED",
    "ENV_SENSITIVITY",
    "ManualScheduler",
    "Scheduler",
    "ThreadScheduler",
    "TimerHandle",
]
