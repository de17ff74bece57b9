"""Research tree progression and the bonuses it grants."""

from growsim.research.bonuses import ResearchBonuses, compute_research_bonuses, research_bonuses
from growsim.research.progression import (
    add_research_points,
    available_research,
    cancel_research,
    harvest_research_points,
    progress_research,
    start_research,
    trade_research_points,
)

__all__ = [
    "ResearchBonuses",
    "add_research_points",
    "available_research",
    "cancel_research",
    "compute_research_bonuses",
    "harvest_research_points",
    "progress_research",
    "research_bonuses",
    "start_research",
    "trade_research_points",
]
