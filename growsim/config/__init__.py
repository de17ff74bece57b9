"""Simulation configuration constants and dataclasses."""

from growsim.config.simulation_config import (
    AutomationConfig,
    BreedingConfig,
    CuringConfig,
    GrowthConfig,
    MarketConfig,
    ResearchConfig,
    SchedulerConfig,
    SimulationConfig,
)

__all__ = [
    "AutomationConfig",
    "BreedingConfig",
    "CuringConfig",
    "GrowthConfig",
    "MarketConfig",
    "ResearchConfig",
    "SchedulerConfig",
    "SimulationConfig",
]
