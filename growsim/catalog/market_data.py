"""Market seeds, market conditions, AI competitors and global events."""

from growsim.catalog.types import Competitor, GlobalEventPreset, MarketCondition, MarketSeed

MARKET_SEEDS = (
    MarketSeed("green-gelato", base_price=8, demand=60, supply=0, volatility=0.2),
    MarketSeed("blue-zushi", base_price=15, demand=75, supply=0, volatility=0.3),
    MarketSeed("honey-cream", base_price=7, demand=50, supply=0, volatility=0.15),
    MarketSeed("black-muffin", base_price=22, demand=90, supply=0, volatility=0.4),
    MarketSeed("gelato-auto", base_price=9, demand=55, supply=0, volatility=0.25),
)

MARKET_CONDITIONS = (
    MarketCondition("cannabis-cup", "Cannabis Cup", 20, 1.5, 30, ("blue-zushi", "black-muffin")),
    MarketCondition("420-festival", "4/20 Festival", 15, 1.3, 25),
    MarketCondition("tourist-season", "Tourist Season", 30, 1.4, 20),
    MarketCondition("market-crash", "Market Crash", 25, 0.6, -30),
    MarketCondition("police-raid", "Police Raid Wave", 10, 1.6, 40),
    MarketCondition("new-competition", "New Competition", 20, 0.8, -15),
)

COMPETITORS = (
    Competitor("green-thumb-gang", "Green Thumb Gang", 65, 0.6, ("green-gelato", "honey-cream")),
    Competitor("premium-cultivators", "Premium Cultivators", 85, 0.4, ("blue-zushi", "black-muffin")),
    Competitor("bulk-growers-inc", "Bulk Growers Inc.", 50, 0.8, ("honey-cream", "gelato-auto")),
)

GLOBAL_EVENTS = (
    GlobalEventPreset(
        "festival", "Grow Festival",
        price_multiplier=1.5, quantity_multiplier=1.2, curing_multiplier=0.9, perfect_window=4.0,
    ),
    GlobalEventPreset(
        "mystic-fog", "Mystic Fog",
        growth_multiplier=1.2, curing_multiplier=1.2, perfect_window=1.5,
    ),
    GlobalEventPreset("cosmic-alignment", "Cosmic Alignment", growth_multiplier=0.8, perfect_window=3.5),
    GlobalEventPreset("market-rush", "Market Rush", price_multiplier=1.3),
)
