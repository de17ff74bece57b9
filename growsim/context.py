"""Execution context handed to every command and tick.

The context bundles the read-only inputs an operation needs besides the
state snapshot: the catalog, the configuration, the injectable random
source and an optional event bus.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from growsim.catalog import Catalog, default_catalog
from growsim.config import SimulationConfig
from growsim.events import EventBus


@dataclass
class SimContext:
    catalog: Catalog
    rng: random.Random
    config: SimulationConfig = field(default_factory=SimulationConfig)
    event_bus: Optional[EventBus] = None

    @classmethod
    def seeded(
        cls,
        seed: int,
        config: Optional[SimulationConfig] = None,
        catalog: Optional[Catalog] = None,
        event_bus: Optional[EventBus] = None,
    ) -> "SimContext":
        """Build a deterministic context from an integer seed."""
        config = config or SimulationConfig()
        config.validate()
        return cls(
            catalog=catalog or default_catalog(),
            rng=random.Random(seed),
            config=config,
            event_bus=event_bus,
        )

    def emit(self, event: object) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(event)
