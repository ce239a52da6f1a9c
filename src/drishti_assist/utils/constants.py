"""
Constants used throughout the assistive navigation core
"""

# Detection loop
DEFAULT_TICK_INTERVAL_MS = 800  # Simulator cadence
MIN_DISTANCE_M = 0.3  # Distances are clamped to this floor
MAX_DISTANCE_M = 15.0  # Entities at or beyond this are evicted
MAX_POPULATION = 4  # No spawns once this many entities are live
SPARSE_POPULATION = 2  # Below this a second spawn may happen

# Confidence
CONFIDENCE_FLOOR = 0.4
CONFIDENCE_CEILING = 0.99
CONFIDENCE_DRIFT = 0.08

# Severity boundaries (meters)
DANGER_DISTANCE_M = 2.0
WARNING_DISTANCE_M = 4.0

# Alerts
DEFAULT_ALERT_COOLDOWN_MS = 3000

# Voice
DEFAULT_LOCALE = "en"
DEFAULT_VOICE_SPEED = 0.9
DEFAULT_AUTO_ACTIVATE_DELAY_MS = 800

# Environment variables
ENV_LOCALE = "DRISHTI_LOCALE"
ENV_SENSITIVITY = "DRISHTI_SENSITIVITY"
ENV_MUTED = "DRISHTI_MUTED"
