"""
Tests for voice intent matching, spoken time and auto-activation.
"""

import unittest
from datetime import datetime

from src.drishti_assist.models import Action, MatcherState
from src.drishti_assist.outputs import Router, SpeechOutput, VoiceOutput
from src.drishti_assist.utils import ManualScheduler
from src.drishti_assist.vocabulary import ENGLISH, HINDI, resolve_locale
from src.drishti_assist.voice import (
    VoiceIntentMatcher,
    format_spoken_time,
    greeting_text,
    normalize_utterance,
    resolve_action,
    salutation_key,
)


class RecordingSpeech(SpeechOutput):
    def __init__(self):
        self.spoken = []
        self.stops = 0

    def speak(self, text, params):
        self.spoken.append(text)

    def stop(self):
        self.stops += 1


class RecordingRouter(Router):
    def __init__(self):
        self.destinations = []

    def go_to(self, destination):
        self.destinations.append(destination)


class FailingRouter(Router):
    def go_to(self, destination):
        raise RuntimeError("no such screen")


AFTERNOON = datetime(2024, 3, 15, 14, 5)
MORNING = datetime(2024, 3, 15, 9, 30)


class TestResolveAction(unittest.TestCase):
    """Test keyword containment and ordering."""

    def test_keyword_inside_sentence(self):
        self.assertEqual(resolve_action("please start camera now", ENGLISH), Action.CAMERA)

    def test_no_match(self):
        self.assertIsNone(resolve_action("xyz nonsense", ENGLISH))
        self.assertIsNone(resolve_action("", ENGLISH))

    def test_declaration_order_wins(self):
        # CAMERA is checked before STOP
        self.assertEqual(resolve_action("stop camera", ENGLISH), Action.CAMERA)
        # SOS is checked before everything else
        self.assertEqual(resolve_action("help me go home", ENGLISH), Action.SOS)

    def test_extra_actions(self):
        self.assertEqual(resolve_action("what time is it", ENGLISH), Action.TIME)
        self.assertEqual(resolve_action("where am i", ENGLISH), Action.WHERE)
        self.assertEqual(resolve_action("say again", ENGLISH), Action.REPEAT)

    def test_hindi_keywords(self):
        self.assertEqual(resolve_action("कैमरा खोलो", HINDI), Action.CAMERA)
        self.assertEqual(resolve_action("समय बताओ", HINDI), Action.TIME)

    def test_normalize(self):
        self.assertEqual(normalize_utterance("  Open CAMERA "), "open camera")
        self.assertEqual(normalize_utterance(None), "")
        self.assertEqual(normalize_utterance(42), "42")


class TestSpokenTime(unittest.TestCase):
    """Test 12-hour spoken time and greetings."""

    def test_english_afternoon(self):
        self.assertEqual(format_spoken_time(AFTERNOON, "en"), "The time is 2:05 PM")

    def test_english_midnight_and_noon(self):
        self.assertEqual(format_spoken_time(datetime(2024, 1, 1, 0, 7), "en"), "The time is 12:07 AM")
        self.assertEqual(format_spoken_time(datetime(2024, 1, 1, 12, 0), "en"), "The time is 12:00 PM")

    def test_hindi(self):
        self.assertEqual(format_spoken_time(AFTERNOON, "hi"), "अभी 2 बजकर 05 मिनट हुए हैं")

    def test_salutation_buckets(self):
        self.assertEqual(salutation_key(0), "morning")
        self.assertEqual(salutation_key(11), "morning")
        self.assertEqual(salutation_key(12), "afternoon")
        self.assertEqual(salutation_key(16), "afternoon")
        self.assertEqual(salutation_key(17), "evening")

    def test_greeting_text(self):
        self.assertTrue(greeting_text(MORNING, "en").startswith("Good Morning. Welcome"))


class TestVoiceIntentMatcher(unittest.TestCase):
    """Test matching side effects and conversation memory."""

    def setUp(self):
        self.speech = RecordingSpeech()
        self.router = RecordingRouter()
        self.scheduler = ManualScheduler()
        self.matcher = VoiceIntentMatcher(
            voice=VoiceOutput(self.speech),
            router=self.router,
            scheduler=self.scheduler,
            now=lambda: AFTERNOON,
        )

    def test_camera_command(self):
        result = self.matcher.match("please start camera now")

        self.assertTrue(result.matched)
        self.assertEqual(result.action, Action.CAMERA)
        self.assertEqual(self.speech.spoken, ["Opening obstacle detection"])
        self.assertEqual(self.router.destinations, ["Camera"])
        self.assertEqual(self.matcher.state, MatcherState.MATCHED)
        self.assertEqual(self.matcher.memory.last_command, Action.CAMERA)
        self.assertEqual(self.matcher.memory.last_response_text, "Opening obstacle detection")

    def test_unmatched(self):
        result = self.matcher.match("xyz nonsense")

        self.assertFalse(result.matched)
        self.assertIsNone(result.action)
        self.assertEqual(self.speech.spoken, ["Command not understood. Please try again."])
        self.assertEqual(self.router.destinations, [])
        self.assertEqual(self.matcher.state, MatcherState.UNMATCHED)
        self.assertIsNone(self.matcher.memory.last_command)

    def test_none_and_empty_utterances(self):
        self.assertFalse(self.matcher.match(None).matched)
        self.assertFalse(self.matcher.match("   ").matched)
        self.assertEqual(len(self.speech.spoken), 2)

    def test_time_command(self):
        result = self.matcher.match("What time is it?")

        self.assertEqual(result.action, Action.TIME)
        self.assertIn("2:05 PM", self.speech.spoken[0])
        self.assertEqual(self.router.destinations, [])

    def test_hindi_time_command(self):
        self.matcher.match("समय क्या है", "hi")
        self.assertEqual(self.speech.spoken, ["अभी 2 बजकर 05 मिनट हुए हैं"])

    def test_stop_does_not_navigate(self):
        result = self.matcher.match("stop")

        self.assertEqual(result.action, Action.STOP)
        self.assertEqual(self.speech.spoken, ["Stopped"])
        self.assertEqual(self.router.destinations, [])

    def test_where_navigates_to_location(self):
        self.matcher.match("where am i")
        self.assertEqual(self.router.destinations, ["Location"])

    def test_repeat_last_response(self):
        self.matcher.match("go home")
        self.matcher.match("repeat")

        self.assertEqual(self.speech.spoken, ["Going home", "Going home"])
        self.assertEqual(self.matcher.memory.last_command, Action.REPEAT)
        self.assertEqual(self.matcher.memory.last_response_text, "Going home")

    def test_repeat_with_nothing_to_repeat(self):
        self.matcher.match("repeat")

        self.assertEqual(self.speech.spoken, ["There is no previous message to repeat."])
        self.assertIsNone(self.matcher.memory.last_response_text)

    def test_failing_router_still_matches(self):
        matcher = VoiceIntentMatcher(
            voice=VoiceOutput(self.speech),
            router=FailingRouter(),
            scheduler=self.scheduler,
        )

        result = matcher.match("open settings")

        self.assertTrue(result.matched)
        self.assertEqual(self.speech.spoken, ["Opening settings"])

    def test_missing_router(self):
        matcher = VoiceIntentMatcher(voice=VoiceOutput(self.speech), scheduler=self.scheduler)
        self.assertTrue(matcher.match("navigation").matched)

    def test_locale_region_tag(self):
        self.assertEqual(resolve_locale("hi-IN"), "hi")
        self.matcher.match("कैमरा", "hi-IN")
        self.assertEqual(self.speech.spoken, ["कैमरा खोल रहे हैं"])

    def test_listening(self):
        self.matcher.start_listening()

        self.assertEqual(self.matcher.state, MatcherState.LISTENING)
        self.assertTrue(self.matcher.memory.is_listening)
        self.assertEqual(self.speech.spoken, ["Listening..."])

        self.matcher.stop_listening()
        self.assertEqual(self.matcher.state, MatcherState.IDLE)
        self.assertFalse(self.matcher.memory.is_listening)


class TestAutoActivate(unittest.TestCase):
    """Test the one-shot greeting timer."""

    def setUp(self):
        self.speech = RecordingSpeech()
        self.scheduler = ManualScheduler()
        self.matcher = VoiceIntentMatcher(
            voice=VoiceOutput(self.speech),
            scheduler=self.scheduler,
            now=lambda: MORNING,
            auto_activate_delay_ms=800,
        )

    def test_greeting_fires_after_delay(self):
        handle = self.matcher.auto_activate()
        self.assertIsNotNone(handle)

        self.scheduler.advance(0.5)
        self.assertEqual(self.speech.spoken, [])

        self.scheduler.advance(0.3)
        self.assertEqual(len(self.speech.spoken), 1)
        self.assertTrue(self.speech.spoken[0].startswith("Good Morning."))
        self.assertEqual(self.matcher.state, MatcherState.LISTENING)
        self.assertTrue(self.matcher.memory.is_listening)

    def test_only_once_per_cycle(self):
        self.assertIsNotNone(self.matcher.auto_activate())
        self.assertIsNone(self.matcher.auto_activate())

        self.scheduler.advance(2.0)
        self.assertEqual(len(self.speech.spoken), 1)
        self.assertIsNone(self.matcher.auto_activate())

    def test_stop_cancels_pending_greeting(self):
        handle = self.matcher.auto_activate()
        self.matcher.stop()

        self.assertFalse(handle.active)
        self.scheduler.advance(2.0)
        self.assertEqual(self.speech.spoken, [])
        self.assertEqual(self.matcher.state, MatcherState.IDLE)
        self.assertFalse(self.matcher.memory.is_auto_active)

    def test_stop_is_idempotent(self):
        self.matcher.auto_activate()
        self.matcher.stop()
        stops = self.speech.stops

        self.matcher.stop()
        self.assertEqual(self.speech.stops, stops)

    def test_rearm_after_stop(self):
        self.matcher.auto_activate()
        self.matcher.stop()

        self.assertIsNotNone(self.matcher.auto_activate())
        self.scheduler.advance(1.0)
        self.assertEqual(len(self.speech.spoken), 1)


if __name__ == "__main__":
    unittest.main()
