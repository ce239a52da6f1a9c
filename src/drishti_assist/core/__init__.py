"""
Detection core - simulator, severity classification, category profiles.
"""

from .categories import CATEGORY_PROFILES
from .random_source import NumpyRandomSource, RandomSource
from .severity import classify_severity, status_text, worst_severity
from .simulator import (
    DetectionFeedSimulator,
    clamp_sensitivity,
    confidence_threshold,
    spawn_chance,
)

__all__ = [
    "CATEGORY_PROFILES",
    "DetectionFeedSimulator",
    "NumpyRandomSource",
    "RandomSource",
    "clamp_sensitivity",
    "classify_severity",
    "confidence_threshold",
    "spawn_chance",
    "status_text",
    "worst_severity",
]
