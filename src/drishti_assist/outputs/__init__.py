"""
Outputs - Pluggable collaborator backends.

The core talks to three external collaborators:
- speech: text-to-speech (fire-and-forget speak, stop in-flight speech)
- haptics: vibration pulses
- router: screen/destination navigation

Backends are chosen per collaborator from config ("console", "command",
"null"). A "null" backend yields None, which call sites treat as an absent
collaborator. Every call site goes through the safe_* helpers or VoiceOutput,
so a failing collaborator is logged and never stops the core.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..models import HapticPattern, VoiceParams
from ..vocabulary import get_vocabulary

logger = logging.getLogger(__name__)


class SpeechOutput(ABC):
    """Text-to-speech collaborator."""

    @abstractmethod
    def speak(self, text: str, params: VoiceParams) -> None:
        """Start speaking text. Must not wait for playback to finish."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Cancel any in-flight speech."""
        pass


class HapticOutput(ABC):
    """Haptic-feedback collaborator."""

    @abstractmethod
    def pulse(self, pattern: HapticPattern) -> None:
        pass


class Router(ABC):
    """Navigation collaborator."""

    @abstractmethod
    def go_to(self, destination: str) -> None:
        pass


@dataclass
class Outputs:
    """The collaborator set built from config; any member may be None."""

    speech: SpeechOutput | None = None
    haptics: HapticOutput | None = None
    router: Router | None = None


def safe_pulse(haptics: HapticOutput | None, pattern: HapticPattern) -> bool:
    """Pulse the haptic collaborator, swallowing failures."""
    if haptics is None:
        return False
    try:
        haptics.pulse(pattern)
        return True
    except Exception as e:
        logger.warning(f"Haptic pulse {pattern.value} failed: {e}")
        return False


def safe_go_to(router: Router | None, destination: str) -> bool:
    """Ask the router for a destination, swallowing failures."""
    if router is None:
        logger.debug(f"No router available for {destination}")
        return False
    try:
        router.go_to(destination)
        return True
    except Exception as e:
        logger.warning(f"Navigation to {destination} failed: {e}")
        return False


class VoiceOutput:
    """
    Guarded speech front-end shared by the alert dispatcher and the matcher.

    Stops any in-flight utterance before starting a new one and attaches
    locale-appropriate VoiceParams.
    """

    def __init__(
        self,
        speech: SpeechOutput | None,
        rate: float = 0.9,
        pitch: float = 1.0,
    ):
        self.speech = speech
        self.rate = rate
        self.pitch = pitch

    def params_for(self, locale: str) -> VoiceParams:
        vocab = get_vocabulary(locale)
        return VoiceParams(language_tag=vocab.language_tag, rate=self.rate, pitch=self.pitch)

    def say(self, text: str, locale: str) -> bool:
        """
        Speak text in the given locale.

        Returns:
            True if the speech collaborator accepted the text
        """
        if not text or self.speech is None:
            return False
        try:
            self.speech.stop()
            self.speech.speak(text, self.params_for(locale))
            return True
        except Exception as e:
            logger.warning(f"Speech failed: {e}")
            return False

    def stop(self) -> None:
        if self.speech is None:
            return
        try:
            self.speech.stop()
        except Exception as e:
            logger.warning(f"Speech stop failed: {e}")


def create_speech(config: dict[str, Any]) -> SpeechOutput | None:
    """
    Factory function to create a speech backend from config.

    Raises:
        ValueError: If the backend type is unknown
    """
    output_type = config.get("type", "console")

    if output_type == "console":
        from .console import ConsoleSpeech

        return ConsoleSpeech()

    elif output_type == "command":
        from .command import CommandSpeech

        return CommandSpeech(config)

    elif output_type == "null":
        return None

    else:
        raise ValueError(f"Unknown speech output type: {output_type}")


def create_haptics(config: dict[str, Any]) -> HapticOutput | None:
    """Factory function to create a haptic backend from config."""
    output_type = config.get("type", "console")

    if output_type == "console":
        from .console import ConsoleHaptics

        return ConsoleHaptics()

    elif output_type == "command":
        from .command import CommandHaptics

        return CommandHaptics(config)

    elif output_type == "null":
        return None

    else:
        raise ValueError(f"Unknown haptic output type: {output_type}")


def create_router(config: dict[str, Any]) -> Router | None:
    """Factory function to create a router backend from config."""
    output_type = config.get("type", "console")

    if output_type == "console":
        from .console import ConsoleRouter

        return ConsoleRouter()

    elif output_type == "command":
        from .command import CommandRouter

        return CommandRouter(config)

    elif output_type == "null":
        return None

    else:
        raise ValueError(f"Unknown router output type: {output_type}")


def create_outputs(config: dict[str, Any]) -> Outputs:
    """
    Create all collaborators from the `outputs` config section.

    A backend that fails to build is logged and left absent.
    """
    outputs = Outputs()
    factories = {
        "speech": create_speech,
        "haptics": create_haptics,
        "router": create_router,
    }
    for name, factory in factories.items():
        try:
            setattr(outputs, name, factory(config.get(name, {})))
        except Exception as e:
            logger.error(f"Failed to create {name} output: {e}")
    return outputs


__all__ = [
    "HapticOutput",
    "Outputs",
    "Router",
    "SpeechOutput",
    "VoiceOutput",
    "create_haptics",
    "create_outputs",
    "create_router",
    "create_speech",
    "safe_go_to",
    "safe_pulse",
]
