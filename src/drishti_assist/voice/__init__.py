"""
Voice commands - utterance matching and spoken time/greeting text.
"""

from .clock_text import format_spoken_time, greeting_text, salutation_key
from .matcher import DESTINATIONS, VoiceIntentMatcher, normalize_utterance, resolve_action

__all__ = [
    "DESTINATIONS",
    "VoiceIntentMatcher",
    "format_spoken_time",
    "greeting_text",
    "normalize_utterance",
    "resolve_action",
    "salutation_key",
]
