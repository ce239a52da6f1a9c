"""
Voice Intent Matcher

Resolves a free-text utterance (typed or recognized) to one navigation action
and performs that action's side effect.

Matching is plain substring containment over the locale's keyword lists,
checked in Action declaration order. The first action with any keyword in the
normalized utterance wins - there is no scoring and no longest-match
preference, so "stop camera" resolves to CAMERA because CAMERA is declared
before STOP.

States: idle -> listening -> (matched | unmatched); stop() returns to idle.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime

from ..models import Action, ConversationMemory, IntentMatchResult, MatcherState
from ..outputs import Router, VoiceOutput, safe_go_to
from ..utils.constants import DEFAULT_AUTO_ACTIVATE_DELAY_MS, DEFAULT_LOCALE
from ..utils.scheduler import Scheduler, ThreadScheduler, TimerHandle
from ..vocabulary import LocaleVocabulary, get_vocabulary, resolve_locale
from .clock_text import format_spoken_time, greeting_text

logger = logging.getLogger(__name__)

# Router destination per action that opens a screen
DESTINATIONS: dict[Action, str] = {
    Action.SOS: "SOS",
    Action.NAVIGATE: "Navigation",
    Action.CAMERA: "Camera",
    Action.HOME: "Home",
    Action.SETTINGS: "Settings",
    Action.WHERE: "Location",
}


def normalize_utterance(utterance) -> str:
    """Trim and lowercase; None or non-text input becomes an empty string."""
    if utterance is None:
        return ""
    if not isinstance(utterance, str):
        utterance = str(utterance)
    return utterance.strip().lower()


def resolve_action(text: str, vocab: LocaleVocabulary) -> Action | None:
    """First action (in declaration order) with a keyword contained in text."""
    if not text:
        return None
    for action in Action:
        for keyword in vocab.commands.get(action, ()):
            if keyword.lower() in text:
                return action
    return None


class VoiceIntentMatcher:
    """
    Utterance-to-action matcher with conversation memory.

    Args:
        voice: Shared guarded speech front-end
        router: Navigation collaborator (may be None)
        scheduler: Timer source for the auto-activation greeting
        now: Wall-clock source for the time action and greeting
        auto_activate_delay_ms: Delay before the greeting fires
        memory: Conversation memory to use (a fresh one by default)
    """

    def __init__(
        self,
        voice: VoiceOutput,
        router: Router | None = None,
        scheduler: Scheduler | None = None,
        now: Callable[[], datetime] = datetime.now,
        auto_activate_delay_ms: int = DEFAULT_AUTO_ACTIVATE_DELAY_MS,
        memory: ConversationMemory | None = None,
    ):
        self.voice = voice
        self.router = router
        self.scheduler = scheduler or ThreadScheduler()
        self._now = now
        self.auto_activate_delay_s = auto_activate_delay_ms / 1000.0
        self.memory = memory or ConversationMemory()

        self._state = MatcherState.IDLE
        self._auto_handle: TimerHandle | None = None
        self._lock = threading.RLock()

    @property
    def state(self) -> MatcherState:
        return self._state

    def match(self, utterance, locale: str = DEFAULT_LOCALE) -> IntentMatchResult:
        """
        Match an utterance and run the matched action.

        Never raises: anything that matches no keyword takes the unmatched
        path, which speaks the locale's "not understood" message.
        """
        locale = resolve_locale(locale)
        vocab = get_vocabulary(locale)
        text = normalize_utterance(utterance)

        with self._lock:
            action = resolve_action(text, vocab)
            if action is None:
                logger.debug(f"No match: {text!r}")
                self._state = MatcherState.UNMATCHED
                self._say(vocab.response("not_understood"), locale)
                return IntentMatchResult(matched=False, action=None)

            logger.info(f"Voice command: {action.value} ({text!r})")
            self._state = MatcherState.MATCHED
            self.memory.last_command = action
            self.execute(action, locale)
            return IntentMatchResult(matched=True, action=action)

    def execute(self, action: Action, locale: str = DEFAULT_LOCALE) -> None:
        """Run the side effect of an action."""
        vocab = get_vocabulary(locale)

        if action == Action.REPEAT:
            if self.memory.last_response_text:
                self.voice.say(self.memory.last_response_text, locale)
            else:
                self.voice.say(vocab.response("no_previous"), locale)

        elif action == Action.TIME:
            self._say(format_spoken_time(self._now(), locale), locale)

        elif action == Action.STOP:
            self._say(vocab.response("stop"), locale)

        else:
            self._say(vocab.response(action.value), locale)
            safe_go_to(self.router, DESTINATIONS[action])

    def start_listening(self, locale: str = DEFAULT_LOCALE) -> None:
        """Enter the listening state and prompt the user."""
        locale = resolve_locale(locale)
        with self._lock:
            self._state = MatcherState.LISTENING
            self.memory.is_listening = True
            self._say(get_vocabulary(locale).response("listening"), locale)

    def stop_listening(self) -> None:
        with self._lock:
            self.memory.is_listening = False
            if self._state == MatcherState.LISTENING:
                self._state = MatcherState.IDLE

    def auto_activate(self, locale: str = DEFAULT_LOCALE) -> TimerHandle | None:
        """
        Schedule the greeting once per activation cycle.

        Returns:
            The pending timer handle, or None if this cycle already activated
        """
        locale = resolve_locale(locale)
        with self._lock:
            if self.memory.is_auto_active:
                logger.debug("Auto-activate already armed")
                return None
            self.memory.is_auto_active = True
            self._auto_handle = self.scheduler.call_later(
                self.auto_activate_delay_s, lambda: self._greet(locale)
            )
            return self._auto_handle

    def stop(self) -> None:
        """Cancel any pending greeting and return to idle. Safe to repeat."""
        with self._lock:
            handle = self._auto_handle
            self._auto_handle = None
            was_active = (
                self._state != MatcherState.IDLE
                or self.memory.is_auto_active
                or self.memory.is_listening
            )

        # Cancel outside the lock so a greeting in flight can finish
        if handle is not None:
            handle.cancel()

        with self._lock:
            self.memory.is_auto_active = False
            self.memory.is_listening = False
            self._state = MatcherState.IDLE

        if was_active:
            self.voice.stop()
            logger.debug("Voice matcher stopped")

    def _greet(self, locale: str) -> None:
        with self._lock:
            if not self.memory.is_auto_active:
                return
            self._auto_handle = None
            self._say(greeting_text(self._now(), locale), locale)
            self.memory.is_listening = True
            self._state = MatcherState.LISTENING

    def _say(self, text: str, locale: str) -> None:
        self.memory.last_response_text = text
        self.voice.say(text, locale)
