"""
Severity Classifier - distance to urgency tier.
"""

from ..models import Detection, Severity
from ..utils.constants import DANGER_DISTANCE_M, WARNING_DISTANCE_M
from ..vocabulary import get_vocabulary


def classify_severity(distance_m: float) -> Severity:
    """
    Map a distance in meters to a severity tier.

    < 2 m is danger, 2 m up to (not including) 4 m is warning, anything
    farther is safe.
    """
    if distance_m < DANGER_DISTANCE_M:
        return Severity.DANGER
    if distance_m < WARNING_DISTANCE_M:
        return Severity.WARNING
    return Severity.SAFE


def worst_severity(detections: list[Detection]) -> Severity | None:
    """Most urgent tier present in the list, or None for an empty list."""
    if not detections:
        return None
    return max(
        (classify_severity(d.distance_m) for d in detections),
        key=lambda s: s.rank,
    )


def status_text(detections: list[Detection], locale: str) -> str:
    """Banner text for the dominant status of a tick."""
    vocab = get_vocabulary(locale)
    worst = worst_severity(detections)
    key = worst.value if worst else "clear"
    return vocab.status_labels[key]
