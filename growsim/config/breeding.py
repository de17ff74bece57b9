"""Breeding and mutation configuration constants."""

MUTATION_BASE_CHANCE = 0.05
MUTATION_CHANCE_PER_GENERATION = 0.02
MUTATION_CHANCE_CAP = 0.25

# Tier draw once a mutation is rolled
LEGENDARY_BASE_ODDS = 0.05
LEGENDARY_ODDS_PER_GENERATION = 0.01
LEGENDARY_ODDS_CAP = 0.15
EPIC_ODDS = 0.25

# Bonus ceilings by mutation type
YIELD_BONUS_CAP = 3.0
QUALITY_BONUS_CAP = 2.5
SPEED_BONUS_FLOOR = 0.3  # Time multiplier, lower is faster
SUPER_BONUS_CAP = 2.0

# Trait jitter
YIELD_JITTER = 0.10
TIME_JITTER = 0.05
TOLERANCE_JITTER = 0.05
TERPENE_JITTER = 0.15
TERPENE_MIN_KEEP = 1.0  # Compounds weaker than this are dropped
TIME_MULTIPLIER_MIN = 0.2
TIME_MULTIPLIER_MAX = 2.0

# Offspring rarity without a mutation
RARITY_UPGRADE_CHANCE = 0.2

# Seed pricing
SEED_DISCOUNT = 0.8
SEED_PRICE_MIN = 10

# Procedural names
NAME_MIN_PARTS = 2
NAME_MAX_PARTS = 4
NAME_GENERATIONS_PER_PART = 2

# Mother plants
MOTHER_PLANT_COST = 200
CLONE_COST = 30
MAX_CLONES = 10

# Offspring seed price factor by attached mutation rarity
MUTATION_SEED_PRICE_FACTORS = {
    "legendary": 1.5,
    "epic": 1.1,
    "rare": 1.05,
}
