"""Curing and quality tier configuration constants."""

CURING_BASE_DURATION = 60.0
CURING_MIN_DURATION = 20.0
CURING_CLIMATE_REDUCTION = 0.08  # Per climate-control level
CURING_NATURAL_BONUS = 0.06
CURING_SCORE_CAP = 1.6
CURING_GRACE_PERIOD = 30.0  # Past due by more than this spoils the batch
CURING_SPOIL_PENALTY = 0.05
CURING_RUSH_PENALTY = 0.10
CURING_SCORE_FLOOR = 0.5

# Score is clamped into this band before tiering
TIER_SCORE_MIN = 0.5
TIER_SCORE_MAX = 1.5

# (tier, minimum score, price multiplier), highest first
TIER_TABLE = (
    ("S", 1.25, 1.5),
    ("A", 1.10, 1.25),
    ("B", 0.95, 1.0),
    ("C", 0.0, 0.85),
)
