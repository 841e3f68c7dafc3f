"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0

MAX_RADIUS_METERS = 1000.0
MAX_TIME_LIMIT_MINUTES = 180
DEFAULT_POLYGON_SEGMENTS = 64
DEFAULT_ON_TIME_RATIO = 0.5

TRAINING_DAYS = 15
POINTS_PER_TRAINING_DAY = 2
ATTENDANCE_WEIGHT = 30.0
APTITUDE_WEIGHT = 30.0
EXAM_WEIGHT = 40.0
TTL_DEMERIT_FACTOR = 0.3
DEFAULT_MERIT = 100.0
DEFAULT_DEMERIT = 0.0
PASSING_EQUIVALENT = 3.0

DEFAULT_LEADERBOARD_SIZE = 10
