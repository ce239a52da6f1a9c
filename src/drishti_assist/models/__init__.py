"""
Consolidated data models for the assistive navigation core.

This package contains all core data structures shared by the detection
pipeline and the voice intent matcher.
"""

from .alerts import Alert, AlertOutcome, AlertThrottleState, HapticPattern, VoiceParams
from .detection import (
    CategoryProfile,
    Detection,
    ObstacleCategory,
    SessionStats,
    Severity,
)
from .intents import Action, ConversationMemory, IntentMatchResult, MatcherState

__all__ = [
    # Detection models
    "CategoryProfile",
    "Detection",
    "ObstacleCategory",
    "SessionStats",
    "Severity",
    # Alert models
    "Alert",
    "AlertOutcome",
    "AlertThrottleState",
    "HapticPattern",
    "VoiceParams",
    # Intent models
    "Action",
    "ConversationMemory",
    "IntentMatchResult",
    "MatcherState",
]
