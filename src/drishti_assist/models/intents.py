"""
Voice intent models - actions, match results, conversation memory.
"""

from dataclasses import dataclass
from enum import Enum


class Action(str, Enum):
    """
    Navigation actions a voice command can resolve to.

    Declaration order is the matching order: the first action whose keyword
    appears in the utterance wins.
    """

    SOS = "sos"
    NAVIGATE = "navigate"
    CAMERA = "camera"
    STOP = "stop"
    HOME = "home"
    SETTINGS = "settings"
    REPEAT = "repeat"
    WHERE = "where"
    TIME = "time"


class MatcherState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    MATCHED = "matched"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class IntentMatchResult:
    matched: bool
    action: Action | None = None


@dataclass
class ConversationMemory:
    """Matcher memory for the lifetime of the owning screen/session."""

    last_response_text: str | None = None
    last_command: Action | None = None
    is_auto_active: bool = False
    is_listening: bool = False

    def reset(self) -> None:
        self.last_response_text = None
        self.last_command = None
        self.is_auto_active = False
        self.is_listening = False
