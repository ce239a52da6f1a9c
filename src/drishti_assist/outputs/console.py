"""
Console outputs - log speech, haptics and navigation instead of performing them.

Used by the CLI demo and as a stand-in on machines without a TTS engine.
"""

import logging
from collections import deque

from ..models import HapticPattern, VoiceParams
from . import HapticOutput, Router, SpeechOutput

logger = logging.getLogger(__name__)

# Recent utterances kept on ConsoleSpeech.spoken
SPOKEN_HISTORY = 50


class ConsoleSpeech(SpeechOutput):
    def __init__(self):
        self.spoken: deque[str] = deque(maxlen=SPOKEN_HISTORY)

    def speak(self, text: str, params: VoiceParams) -> None:
        self.spoken.append(text)
        logger.info(f"Say [{params.language_tag} x{params.rate:g}]: {text}")

    def stop(self) -> None:
        pass


class ConsoleHaptics(HapticOutput):
    def pulse(self, pattern: HapticPattern) -> None:
        logger.info(f"Haptic: {pattern.value}")


class ConsoleRouter(Router):
    def __init__(self):
        self.current: str | None = None

    def go_to(self, destination: str) -> None:
        self.current = destination
        logger.info(f"Navigate -> {destination}")
