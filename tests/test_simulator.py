"""
Tests for the detection feed simulator.
"""

import dataclasses
import unittest

from src.drishti_assist.core.random_source import NumpyRandomSource, randint, uniform, weighted_choice
from src.drishti_assist.core.simulator import (
    DetectionFeedSimulator,
    clamp_sensitivity,
    confidence_threshold,
    spawn_chance,
)
from src.drishti_assist.models import ObstacleCategory


class ScriptedRandom:
    """RandomSource that replays a fixed list of draws."""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        if not self.values:
            raise AssertionError("random source exhausted")
        return self.values.pop(0)


# One spawn: category, distance, confidence, direction, max_age, bbox x4
PERSON_SPAWN = [0.0, 0.2, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]
# One update: pace, confidence drift, bbox x4 (all neutral)
NEUTRAL_UPDATE = [0.5, 0.5, 0.5, 0.5, 0.5, 0.5]
# No spawn: first attempt, second attempt
NO_SPAWN = [0.99, 0.99]


class TestSensitivityMath(unittest.TestCase):
    """Test sensitivity-derived thresholds."""

    def test_confidence_threshold_range(self):
        self.assertAlmostEqual(confidence_threshold(0.0), 0.3)
        self.assertAlmostEqual(confidence_threshold(0.5), 0.5)
        self.assertAlmostEqual(confidence_threshold(1.0), 0.7)

    def test_spawn_chance_range(self):
        self.assertAlmostEqual(spawn_chance(0.0), 0.4)
        self.assertAlmostEqual(spawn_chance(1.0), 0.7)

    def test_clamp(self):
        self.assertEqual(clamp_sensitivity(-1.0), 0.0)
        self.assertEqual(clamp_sensitivity(2.0), 1.0)
        self.assertEqual(clamp_sensitivity(0.25), 0.25)


class TestRandomHelpers(unittest.TestCase):
    """Test draws derived from the single uniform primitive."""

    def test_uniform(self):
        self.assertAlmostEqual(uniform(ScriptedRandom([0.5]), 2.0, 4.0), 3.0)

    def test_randint_inclusive(self):
        self.assertEqual(randint(ScriptedRandom([0.0]), 3, 10), 3)
        self.assertEqual(randint(ScriptedRandom([0.9999]), 3, 10), 10)

    def test_weighted_choice(self):
        items = ["a", "b", "c"]
        weights = [1.0, 2.0, 1.0]
        self.assertEqual(weighted_choice(ScriptedRandom([0.1]), items, weights), "a")
        self.assertEqual(weighted_choice(ScriptedRandom([0.5]), items, weights), "b")
        self.assertEqual(weighted_choice(ScriptedRandom([0.9]), items, weights), "c")

    def test_numpy_source_is_seeded(self):
        a = NumpyRandomSource(42)
        b = NumpyRandomSource(42)
        self.assertEqual([a.random() for _ in range(5)], [b.random() for _ in range(5)])


class TestScriptedSimulation(unittest.TestCase):
    """Test exact spawn and update behavior with a scripted source."""

    def test_start_spawns_one_entity(self):
        sim = DetectionFeedSimulator(ScriptedRandom(PERSON_SPAWN))
        sim.start()

        self.assertTrue(sim.running)
        self.assertEqual(len(sim.population), 1)
        entity = sim.population[0]
        self.assertEqual(entity.category, ObstacleCategory.PERSON)
        self.assertAlmostEqual(entity.distance_m, 2.0)
        self.assertAlmostEqual(entity.confidence, 0.6)
        self.assertEqual(entity.direction, -1)
        self.assertEqual(entity.max_age, 3)
        self.assertEqual(entity.age, 0)
        self.assertEqual(entity.bbox, (20.0, 80.0, 60.0, 80.0))
        # Nothing emitted before the first tick
        self.assertEqual(sim.detections, [])

    def test_tick_advances_entity(self):
        source = ScriptedRandom(PERSON_SPAWN + NEUTRAL_UPDATE + NO_SPAWN)
        sim = DetectionFeedSimulator(source)
        sim.start()

        detections = sim.tick(0.5)

        self.assertEqual(len(detections), 1)
        d = detections[0]
        # Approaching person: 2.0 - 0.3 * 1.0
        self.assertAlmostEqual(d.distance_m, 1.7)
        self.assertAlmostEqual(d.confidence, 0.6)
        self.assertEqual(d.bbox, (20.0, 80.0, 60.0, 80.0))
        self.assertEqual(d.age, 1)
        self.assertEqual(source.values, [])

        self.assertEqual(sim.stats.ticks, 1)
        self.assertEqual(sim.stats.total_detections_emitted, 1)
        self.assertEqual(sim.stats.danger_alert_count, 1)

    def test_entity_expires_at_max_age(self):
        # max_age 3: ages 1 and 2 survive, age 3 is evicted
        script = PERSON_SPAWN + (NEUTRAL_UPDATE + NO_SPAWN) * 3
        sim = DetectionFeedSimulator(ScriptedRandom(script))
        sim.start()

        self.assertEqual(len(sim.tick(0.5)), 1)
        self.assertEqual(len(sim.tick(0.5)), 1)
        self.assertEqual(sim.tick(0.5), [])
        self.assertEqual(sim.population, [])

    def test_low_confidence_is_hidden_not_evicted(self):
        # Confidence 0.6 is below the 0.7 threshold at full sensitivity;
        # spawn attempts at sensitivity 1.0 still miss with 0.99
        source = ScriptedRandom(PERSON_SPAWN + NEUTRAL_UPDATE + NO_SPAWN)
        sim = DetectionFeedSimulator(source)
        sim.start()

        self.assertEqual(sim.tick(1.0), [])
        self.assertEqual(len(sim.population), 1)
        self.assertEqual(sim.stats.total_detections_emitted, 0)

    def test_full_population_skips_spawn_draws(self):
        sim = DetectionFeedSimulator(ScriptedRandom(PERSON_SPAWN))
        sim.start()
        # Fill to the cap with copies of the first entity
        first = sim.population[0]
        sim._population = [first] + [
            dataclasses.replace(first, id=f"extra_{i}") for i in range(3)
        ]
        sim._random = ScriptedRandom(NEUTRAL_UPDATE * 4)

        detections = sim.tick(0.5)

        self.assertEqual(len(detections), 4)
        self.assertEqual(sim._random.values, [])

    def test_first_attempt_below_chance_spawns(self):
        # At sensitivity 0 the first-attempt chance is 0.4; the new entity
        # makes the population 2, so the second attempt is never drawn
        source = ScriptedRandom(PERSON_SPAWN + NEUTRAL_UPDATE + [0.39] + PERSON_SPAWN)
        sim = DetectionFeedSimulator(source)
        sim.start()

        detections = sim.tick(0.0)

        self.assertEqual(source.values, [])
        self.assertEqual(len(sim.population), 2)
        self.assertEqual([d.distance_m for d in detections], [1.7, 2.0])
        self.assertEqual([d.age for d in detections], [1, 0])
        self.assertNotEqual(detections[0].id, detections[1].id)

    def test_first_attempt_at_chance_does_not_spawn(self):
        source = ScriptedRandom(PERSON_SPAWN + NEUTRAL_UPDATE + [0.4, 0.99])
        sim = DetectionFeedSimulator(source)
        sim.start()

        sim.tick(0.0)

        self.assertEqual(source.values, [])
        self.assertEqual(len(sim.population), 1)

    def test_sensitivity_raises_first_attempt_chance(self):
        # 0.5 misses at sensitivity 0 (chance 0.4) but spawns at 1 (chance 0.7)
        source = ScriptedRandom(PERSON_SPAWN + NEUTRAL_UPDATE + [0.5] + PERSON_SPAWN)
        sim = DetectionFeedSimulator(source)
        sim.start()

        sim.tick(1.0)

        self.assertEqual(source.values, [])
        self.assertEqual(len(sim.population), 2)

    def test_second_attempt_below_chance_spawns(self):
        source = ScriptedRandom(PERSON_SPAWN + NEUTRAL_UPDATE + [0.99, 0.24] + PERSON_SPAWN)
        sim = DetectionFeedSimulator(source)
        sim.start()

        sim.tick(0.0)

        self.assertEqual(source.values, [])
        self.assertEqual(len(sim.population), 2)

    def test_second_attempt_at_chance_does_not_spawn(self):
        source = ScriptedRandom(PERSON_SPAWN + NEUTRAL_UPDATE + [0.99, 0.25])
        sim = DetectionFeedSimulator(source)
        sim.start()

        sim.tick(0.0)

        self.assertEqual(source.values, [])
        self.assertEqual(len(sim.population), 1)

    def test_empty_population_can_spawn_twice(self):
        # The initial entity (max_age 3) is evicted on the third tick; both
        # attempts then spawn and bring the population back to 2
        script = PERSON_SPAWN + (NEUTRAL_UPDATE + NO_SPAWN) * 2
        script += NEUTRAL_UPDATE + [0.0] + PERSON_SPAWN + [0.0] + PERSON_SPAWN
        source = ScriptedRandom(script)
        sim = DetectionFeedSimulator(source)
        sim.start()

        sim.tick(0.0)
        sim.tick(0.0)
        detections = sim.tick(0.0)

        self.assertEqual(source.values, [])
        self.assertEqual(len(sim.population), 2)
        self.assertTrue(all(d.age == 0 for d in detections))

    def test_second_attempt_skipped_when_population_is_two(self):
        sim = DetectionFeedSimulator(ScriptedRandom(PERSON_SPAWN))
        sim.start()
        first = sim.population[0]
        sim._population = [first, dataclasses.replace(first, id="extra")]
        # Two updates and a single missed first attempt; no second draw
        sim._random = ScriptedRandom(NEUTRAL_UPDATE * 2 + [0.99])

        sim.tick(0.0)

        self.assertEqual(sim._random.values, [])
        self.assertEqual(len(sim.population), 2)

    def test_tick_when_stopped_returns_empty(self):
        sim = DetectionFeedSimulator(ScriptedRandom([]))
        self.assertEqual(sim.tick(0.5), [])
        self.assertEqual(sim.stats.ticks, 0)

    def test_returned_list_is_a_copy(self):
        source = ScriptedRandom(PERSON_SPAWN + NEUTRAL_UPDATE + NO_SPAWN)
        sim = DetectionFeedSimulator(source)
        sim.start()

        detections = sim.tick(0.5)
        detections[0].distance_m = 99.0

        self.assertAlmostEqual(sim.population[0].distance_m, 1.7)


class TestSeededSimulation(unittest.TestCase):
    """Test invariants over a long seeded run."""

    def setUp(self):
        self.sim = DetectionFeedSimulator(NumpyRandomSource(1234))
        self.sim.start()

    def test_invariants_hold_every_tick(self):
        for i in range(500):
            sensitivity = (i % 11) / 10
            detections = self.sim.tick(sensitivity)
            threshold = confidence_threshold(sensitivity)

            self.assertLessEqual(len(self.sim.population), 4)
            self.assertLessEqual(len(detections), 4)

            distances = [d.distance_m for d in detections]
            self.assertEqual(distances, sorted(distances))

            for d in detections:
                self.assertGreaterEqual(d.distance_m, 0.3)
                self.assertLess(d.distance_m, 15.0)
                self.assertGreaterEqual(d.confidence, 0.4)
                self.assertLessEqual(d.confidence, 0.99)
                self.assertGreaterEqual(d.confidence, threshold)
                self.assertEqual(d.distance_m, round(d.distance_m, 1))
                self.assertEqual(d.confidence, round(d.confidence, 2))
                self.assertIn(d.direction, (-1, 1))

        self.assertEqual(self.sim.stats.ticks, 500)

    def test_stats_are_monotonic(self):
        previous = (0, 0)
        for _ in range(100):
            self.sim.tick(0.5)
            current = (self.sim.stats.total_detections_emitted, self.sim.stats.danger_alert_count)
            self.assertGreaterEqual(current[0], previous[0])
            self.assertGreaterEqual(current[1], previous[1])
            self.assertLessEqual(current[1], current[0])
            previous = current

    def test_stop_freezes_and_clears(self):
        for _ in range(10):
            self.sim.tick(0.5)
        self.sim.stop()
        ticks = self.sim.stats.ticks

        self.assertFalse(self.sim.running)
        self.assertEqual(self.sim.population, [])
        self.assertEqual(self.sim.detections, [])
        self.assertEqual(self.sim.tick(0.5), [])
        self.assertEqual(self.sim.stats.ticks, ticks)

        # Second stop is a no-op
        self.sim.stop()
        self.assertEqual(self.sim.stats.ticks, ticks)

    def test_restart_resets_stats(self):
        for _ in range(10):
            self.sim.tick(0.5)
        self.sim.stop()
        self.sim.start()

        self.assertEqual(self.sim.stats.ticks, 0)
        self.assertEqual(self.sim.stats.total_detections_emitted, 0)
        self.assertEqual(len(self.sim.population), 1)


if __name__ == "__main__":
    unittest.main()
