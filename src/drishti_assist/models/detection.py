"""
Detection data models - obstacle categories, tracked detections, session stats.
"""

from dataclasses import dataclass
from enum import Enum


class ObstacleCategory(str, Enum):
    """Fixed set of obstacle classes the simulator can produce."""

    PERSON = "person"
    BICYCLE = "bicycle"
    CAR = "car"
    MOTORCYCLE = "motorcycle"
    STAIRS = "stairs"
    POTHOLE = "pothole"
    DOG = "dog"
    CONE = "cone"
    BENCH = "bench"
    POLE = "pole"
    RICKSHAW = "rickshaw"
    SPEED_BREAKER = "speed_breaker"


class Severity(str, Enum):
    """Urgency tier derived from distance."""

    DANGER = "danger"
    WARNING = "warning"
    SAFE = "safe"

    @property
    def rank(self) -> int:
        """Higher is more urgent."""
        return {"danger": 2, "warning": 1, "safe": 0}[self.value]


@dataclass(frozen=True)
class CategoryProfile:
    """Intrinsic simulation parameters of an obstacle category."""

    category: ObstacleCategory
    min_distance: float
    max_distance: float
    move_speed: float  # meters per tick at unit pace; 0 = static obstacle
    spawn_weight: float


@dataclass
class Detection:
    """
    One tracked synthetic obstacle.

    Attributes:
        id: Opaque identifier, stable for the entity's lifetime
        category: Obstacle class
        confidence: Detector score, kept within [0.4, 0.99]
        distance_m: Distance ahead in meters, never below 0.3
        bbox: (x, y, width, height) in the simulator's frame
        direction: +1 retreating, -1 approaching
        move_speed: Copied from the category profile at spawn
        age: Ticks survived so far
        max_age: Lifetime ceiling in ticks
    """

    id: str
    category: ObstacleCategory
    confidence: float
    distance_m: float
    bbox: tuple[float, float, float, float]
    direction: int
    move_speed: float
    age: int = 0
    max_age: int = 10

    @property
    def severity(self) -> Severity:
        from ..core.severity import classify_severity

        return classify_severity(self.distance_m)

    def is_expired(self, max_distance: float) -> bool:
        """Check if the entity should leave the live population."""
        return self.age >= self.max_age or self.distance_m >= max_distance


@dataclass
class SessionStats:
    """Aggregate counters for one detection session."""

    total_detections_emitted: int = 0
    danger_alert_count: int = 0
    session_start_time: float | None = None
    ticks: int = 0

    def reset(self, now: float) -> None:
        self.total_detections_emitted = 0
        self.danger_alert_count = 0
        self.session_start_time = now
        self.ticks = 0

    def record(self, emitted: list[Detection], danger_distance: float) -> None:
        """Fold one tick's emitted list into the counters."""
        self.ticks += 1
        self.total_detections_emitted += len(emitted)
        self.danger_alert_count += sum(
            1 for d in emitted if d.distance_m < danger_distance
        )

    def elapsed_seconds(self, now: float) -> float:
        if self.session_start_time is None:
            return 0.0
        return max(0.0, now - self.session_start_time)

