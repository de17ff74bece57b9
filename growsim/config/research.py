"""Research progression configuration constants."""

# Points from harvests: floor(quality_pct / divisor) x rarity weight
HARVEST_POINTS_DIVISOR = 10
RARITY_POINT_WEIGHTS = {
    "common": 1.0,
    "rare": 1.5,
    "epic": 2.0,
    "legendary": 3.0,
}

# Points from dealer trades: max(1, quantity // divisor)
TRADE_POINTS_DIVISOR = 50

RESEARCH_YIELD_CAP = 5.0
RESEARCH_TIME_REDUCTION_CAP = 0.5
RESEARCH_COST_REDUCTION_CAP = 0.5
QUALITY_BOOST_SCALE = 0.005  # +10 quality boost adds 0.05 to the carried score
