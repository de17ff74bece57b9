"""Market, offer and dealer configuration constants."""

# Anonymous offers
OFFER_COUNT = 3
OFFER_REFRESH_COOLDOWN = 30.0
OFFER_STAGE_HARVESTS = 5  # Harvests per stage
OFFER_MIN_QTY_BASE = 5
OFFER_MIN_QTY_PER_STAGE = 10
OFFER_MIN_QTY_CAP = 200
OFFER_MAX_QTY_BASE = 20
OFFER_MAX_QTY_PER_STAGE = 20
OFFER_MAX_QTY_CAP = 400
OFFER_PRICE_SPREAD = 2.0  # Price drawn from 1..3 before stage bonus
OFFER_PRICE_PER_STAGE = 0.1
OFFER_PRICE_MIN = 1.0
OFFER_PRICE_MAX = 4.0
HAGGLE_SUCCESS_CHANCE = 0.4
HAGGLE_PRICE_FACTOR = 1.2
HAGGLE_PRICE_CAP = 5.0

# Dealers
DEALER_BASE_PRICE = 3.0  # Nugs per bud before multipliers
DEALS_PER_RELATIONSHIP_LEVEL = 3
RELATIONSHIP_LEVEL_MAX = 10
LOYALTY_PER_LEVEL = 0.03
LOYALTY_CAP = 0.3
REPUTATION_CAP = 1000
CONTRACT_MIN_LEVEL = 3
CONTRACT_PREMIUM = 1.1
CONTRACT_INTERVAL = 7 * 24 * 3600.0  # Weekly deliveries
PREFERRED_STRAIN_PREMIUM = 1.1
DEALER_RISK_SCALE = 0.3
DEALER_BONUS_ROLL = 95.0
DEALER_BONUS_FACTOR = 1.1

# Untracked inventory (no batches) sells at this multiplier
FLAT_QUALITY_MULTIPLIER = 1.0

# Dynamic strain pricing
SUPPLY_DECAY = 0.9
DEMAND_WALK = 5.0
DEMAND_MIN = 20
DEMAND_MAX = 100
RATIO_FACTOR_MIN = 0.5
RATIO_FACTOR_MAX = 2.0
RATIO_DIVISOR = 5.0
ZERO_SUPPLY_DIVISOR = 10.0
TERPENE_BONUS_DIVISOR = 400.0
TERPENE_BONUS_CAP = 0.5
TREND_RISING_DEMAND = 70
TREND_RISING_SUPPLY = 50
TREND_FALLING_DEMAND = 40
TREND_FALLING_SUPPLY = 100
LARGE_SALE_QUANTITY = 50
COMPETITOR_SUPPLY_SCALE = 30
COMPETITOR_REPUTABLE = 70
COMPETITOR_DEMAND_NUDGE = 2
CONDITION_SPAWN_CHANCE = 0.05
MAX_ACTIVE_CONDITIONS = 2
PRICE_HISTORY_LIMIT = 50
PRICE_FLOOR = 0.01
BRED_STRAIN_DEMAND = 60
BRED_STRAIN_VOLATILITY = 0.3
BRED_STRAIN_PRICE_PER_GENERATION = 0.1
