"""
Obstacle category profiles.

Distance ranges are meters, move speed is meters per tick at unit pace, and
spawn weights are relative (they need not sum to 1).
"""

from ..models import CategoryProfile, ObstacleCategory

CATEGORY_PROFILES: tuple[CategoryProfile, ...] = (
    CategoryProfile(ObstacleCategory.PERSON, 0.5, 8.0, 0.3, 0.35),
    CategoryProfile(ObstacleCategory.BICYCLE, 1.0, 10.0, 0.5, 0.15),
    CategoryProfile(ObstacleCategory.CAR, 2.0, 15.0, 1.2, 0.20),
    CategoryProfile(ObstacleCategory.MOTORCYCLE, 1.5, 12.0, 0.8, 0.10),
    CategoryProfile(ObstacleCategory.STAIRS, 0.5, 5.0, 0.0, 0.10),
    CategoryProfile(ObstacleCategory.POTHOLE, 0.3, 4.0, 0.0, 0.08),
    CategoryProfile(ObstacleCategory.DOG, 0.5, 6.0, 0.4, 0.08),
    CategoryProfile(ObstacleCategory.CONE, 0.5, 5.0, 0.0, 0.05),
    CategoryProfile(ObstacleCategory.BENCH, 0.5, 5.0, 0.0, 0.04),
    CategoryProfile(ObstacleCategory.POLE, 0.3, 3.0, 0.0, 0.06),
    CategoryProfile(ObstacleCategory.RICKSHAW, 1.0, 10.0, 0.6, 0.08),
    CategoryProfile(ObstacleCategory.SPEED_BREAKER, 0.5, 5.0, 0.0, 0.05),
)
