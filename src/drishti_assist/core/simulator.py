"""
Detection Feed Simulator

Maintains a small population of synthetic obstacles and advances it once per
tick. Each tick runs, in order:

  1. advance every live entity (distance, confidence, bbox jitter, age)
  2. evict entities past their lifetime or beyond MAX_DISTANCE_M
  3. maybe spawn new entities (fewer spawns as the population grows)
  4. filter by the sensitivity-derived confidence threshold and sort closest first
  5. fold the emitted list into the session stats

Entities below the confidence threshold keep evolving in the background; they
are only hidden from the emitted list. The simulator performs no I/O and has no
timer of its own - DetectionSession drives tick().
"""

import dataclasses
import itertools
import logging
import time
from collections.abc import Callable, Sequence

from ..models import CategoryProfile, Detection, SessionStats
from ..utils.constants import (
    CONFIDENCE_CEILING,
    CONFIDENCE_DRIFT,
    CONFIDENCE_FLOOR,
    DANGER_DISTANCE_M,
    MAX_DISTANCE_M,
    MAX_POPULATION,
    MIN_DISTANCE_M,
    SPARSE_POPULATION,
)
from .categories import CATEGORY_PROFILES
from .random_source import NumpyRandomSource, RandomSource, randint, uniform, weighted_choice

logger = logging.getLogger(__name__)

# Spawn tuning
BASE_SPAWN_CHANCE = 0.4
SENSITIVITY_SPAWN_BONUS = 0.3
SECOND_SPAWN_CHANCE = 0.25
MIN_LIFETIME_TICKS = 3
MAX_LIFETIME_TICKS = 10
SPAWN_CONFIDENCE_RANGE = (0.6, 0.95)


def clamp_sensitivity(sensitivity: float) -> float:
    """Clamp a user sensitivity to [0, 1]."""
    if sensitivity < 0.0 or sensitivity > 1.0:
        logger.warning(f"Sensitivity {sensitivity} out of range, clamping to [0, 1]")
    return min(1.0, max(0.0, sensitivity))


def confidence_threshold(sensitivity: float) -> float:
    """Minimum confidence a detection needs to be emitted (0.3 - 0.7)."""
    return 0.3 + 0.4 * clamp_sensitivity(sensitivity)


def spawn_chance(sensitivity: float) -> float:
    """Probability of the first spawn attempt in a tick."""
    return BASE_SPAWN_CHANCE + SENSITIVITY_SPAWN_BONUS * clamp_sensitivity(sensitivity)


class DetectionFeedSimulator:
    """
    Pseudo-random obstacle generator over bounded state.

    All draws go through the injected RandomSource, so a scripted source gives
    exact, repeatable spawns and updates.
    """

    def __init__(
        self,
        random_source: RandomSource | None = None,
        profiles: Sequence[CategoryProfile] = CATEGORY_PROFILES,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._random = random_source or NumpyRandomSource()
        self._profiles = tuple(profiles)
        self._weights = [p.spawn_weight for p in self._profiles]
        self._clock = clock
        self._ids = itertools.count(1)

        self._population: list[Detection] = []
        self._emitted: list[Detection] = []
        self._running = False
        self.stats = SessionStats()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def population(self) -> list[Detection]:
        """Every live entity, including those below the confidence threshold."""
        return list(self._population)

    @property
    def detections(self) -> list[Detection]:
        """The list emitted by the most recent tick."""
        return list(self._emitted)

    def start(self) -> None:
        """Reset population and stats, seeding one initial entity."""
        self._population = [self._spawn()]
        self._emitted = []
        self.stats.reset(self._clock())
        self._running = True
        logger.debug(f"Simulator started with {self._population[0].category.value}")

    def stop(self) -> None:
        """Halt the feed and clear all entities. A second call is a no-op."""
        if not self._running:
            return
        self._running = False
        self._population = []
        self._emitted = []
        logger.debug("Simulator stopped")

    def tick(self, sensitivity: float) -> list[Detection]:
        """
        Advance the population one step and return the ranked detection list.

        Args:
            sensitivity: User sensitivity in [0, 1] (clamped)

        Returns:
            Detections at or above the confidence threshold, closest first.
            Empty while the simulator is stopped.
        """
        if not self._running:
            return []

        sensitivity = clamp_sensitivity(sensitivity)

        for entity in self._population:
            self._advance(entity)

        self._population = [
            e for e in self._population if not e.is_expired(MAX_DISTANCE_M)
        ]

        if len(self._population) < MAX_POPULATION and self._random.random() < spawn_chance(
            sensitivity
        ):
            self._population.append(self._spawn())
        if len(self._population) < SPARSE_POPULATION and self._random.random() < SECOND_SPAWN_CHANCE:
            self._population.append(self._spawn())

        threshold = confidence_threshold(sensitivity)
        emitted = [
            dataclasses.replace(e) for e in self._population if e.confidence >= threshold
        ]
        emitted.sort(key=lambda d: d.distance_m)

        self.stats.record(emitted, DANGER_DISTANCE_M)
        self._emitted = emitted
        return list(emitted)

    def _spawn(self) -> Detection:
        profile = weighted_choice(self._random, self._profiles, self._weights)
        distance = uniform(self._random, profile.min_distance, profile.max_distance)
        confidence = uniform(self._random, *SPAWN_CONFIDENCE_RANGE)
        direction = -1 if self._random.random() < 0.5 else 1
        max_age = randint(self._random, MIN_LIFETIME_TICKS, MAX_LIFETIME_TICKS)
        bbox = (
            uniform(self._random, 20, 270),
            uniform(self._random, 80, 380),
            uniform(self._random, 60, 180),
            uniform(self._random, 80, 230),
        )
        return Detection(
            id=f"det_{next(self._ids)}",
            category=profile.category,
            confidence=round(confidence, 2),
            distance_m=_spawn_distance(distance),
            bbox=bbox,
            direction=direction,
            move_speed=profile.move_speed,
            age=0,
            max_age=max_age,
        )

    def _advance(self, entity: Detection) -> None:
        pace = 0.5 + self._random.random()
        distance = entity.distance_m + entity.direction * entity.move_speed * pace
        entity.distance_m = round(max(MIN_DISTANCE_M, distance), 1)

        drift = (self._random.random() - 0.5) * CONFIDENCE_DRIFT
        confidence = min(CONFIDENCE_CEILING, max(CONFIDENCE_FLOOR, entity.confidence + drift))
        entity.confidence = round(confidence, 2)

        x, y, w, h = entity.bbox
        entity.bbox = (
            x + (self._random.random() - 0.5) * 4,
            y + (self._random.random() - 0.5) * 4,
            w + (self._random.random() - 0.5) * 2,
            h + (self._random.random() - 0.5) * 2,
        )
        entity.age += 1


def _spawn_distance(distance: float) -> float:
    """Round a drawn spawn distance into [MIN_DISTANCE_M, MAX_DISTANCE_M)."""
    return round(min(MAX_DISTANCE_M - 0.1, max(MIN_DISTANCE_M, distance)), 1)
