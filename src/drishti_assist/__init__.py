"""
DrishtiAI Assist - obstacle alert loop and voice command core for an
assistive navigation app.
"""

from .core import DetectionFeedSimulator, classify_severity
from .processor import AlertDispatcher, DetectionSession
from .voice import VoiceIntentMatcher

__version__ = "1.0.0"

__all__ = [
    "AlertDispatcher",
    "DetectionFeedSimulator",
    "DetectionSession",
    "VoiceIntentMatcher",
    "classify_severity",
]
