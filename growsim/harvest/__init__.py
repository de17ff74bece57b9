"""Harvest yield, curing pipeline and quality tiers."""

from growsim.harvest.curing import curing_duration, process_curing_tick, rush_curing
from growsim.harvest.harvesting import HarvestReceipt, harvest
from growsim.harvest.quality import tier_for_score
from growsim.harvest.yield_model import YieldBreakdown, compute_yield

__all__ = [
    "HarvestReceipt",
    "YieldBreakdown",
    "compute_yield",
    "curing_duration",
    "harvest",
    "process_curing_tick",
    "rush_curing",
    "tier_for_score",
]
