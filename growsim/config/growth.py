"""Plant growth and care configuration constants.

All durations are in seconds of simulation clock.
"""

# Quality multiplier bounds, enforced after every care action
QUALITY_MIN = 0.3
QUALITY_MAX = 3.0
QUALITY_START = 1.0

# Composite growth-time multiplier bounds
TIME_MULTIPLIER_MIN = 0.5  # Never faster than half the baseline phase time
TIME_MULTIPLIER_MAX = 2.0

# Watering
WATER_COST = 5
WATER_COOLDOWN = 15.0
WATER_MAX_STACKS = 5
WATER_RECOMMENDED_DELTA = 0.10
WATER_WRONG_PHASE_DELTA = -0.05
WATER_PERFECT_BONUS = 0.05
WATER_PERFECT_BONUS_WRONG_PHASE = 0.02
WATER_SKILL_WRONG_PHASE_SCALE = 0.5  # Skill counts half when overwatering
WATER_CHAIN_STEP = 3  # Perfect waterings per chain bonus step
WATER_CHAIN_BONUS_PER_STEP = 0.01
WATER_CHAIN_BONUS_MAX = 0.03

# Perfect-timing window after the water cooldown expires
PERFECT_WINDOW_BASE = 2.5

# Fertilizing
FERTILIZE_COST = 15
FERTILIZE_COOLDOWN = 20.0
FERTILIZE_RECOMMENDED_DELTA = 0.15
FERTILIZE_WRONG_PHASE_DELTA = -0.05
FERTILIZE_BURN_DELTA = -0.10  # Nutrient-sensitivity malus

# Water stacks add yield up to a cap
WATER_STACK_YIELD_STEP = 0.05
WATER_STACK_YIELD_CAP = 0.25

# Harvest random variance (+/-)
YIELD_VARIANCE = 0.10

# Environment drift (per drift tick, before stabilization)
PH_DRIFT = 0.15
EC_DRIFT = 0.075
HUMIDITY_DRIFT = 2.5
TEMPERATURE_DRIFT = 1.25
ENV_ADJUST_RATE = 0.6  # Fraction of the gap closed by one adjustment
ENV_ADJUST_NOISE = 0.2

# Pest pressure
PEST_FREQUENCY_DEFAULT = 0.3
PEST_PROTECTION_CAP = 0.9
PEST_SEVERITY_MIN = 10.0
PEST_SEVERITY_SPREAD = 30.0
PEST_SPREAD_SCALE = 0.5
PEST_DAMAGE_SCALE = 10.0
PEST_SELF_RESOLVE_CHANCE = 0.05
PEST_RESOLVED_SEVERITY = 1.0
