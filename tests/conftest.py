"""Pytest configuration and fixtures for grow simulation tests."""

import random
from dataclasses import replace

import pytest

from growsim import SimContext, initial_state
from growsim.catalog import default_catalog
from growsim.catalog.types import SoilType
from growsim.events import EventBus
from growsim.state import Plant, PlantModifiers


class ScriptedRandom(random.Random):
    """Random source that replays queued ``random()`` values, then falls back to a seed."""

    def __init__(self, values=(), seed=0):
        super().__init__(seed)
        self.queued = list(values)

    def random(self):
        if self.queued:
            return self.queued.pop(0)
        return super().random()


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def ctx(catalog, seeded_rng, event_bus):
    return SimContext(catalog=catalog, rng=seeded_rng, event_bus=event_bus)


@pytest.fixture
def scripted_ctx(catalog, event_bus):
    """Factory for a context whose RNG returns the given values first."""

    def build(*values):
        return SimContext(catalog=catalog, rng=ScriptedRandom(values), event_bus=event_bus)

    return build


@pytest.fixture
def fresh_state(catalog):
    return initial_state(catalog)


@pytest.fixture
def grow():
    """Factory that drops a plant straight into a slot without charging or rolling."""

    def build(state, slot=0, strain_id="green-gelato", phase=0, elapsed=0.0, plant_id=None, **modifiers):
        plant = Plant(
            id=plant_id or f"plant-test-{slot}",
            strain_id=strain_id,
            planted_at=0.0,
            phase=phase,
            elapsed=elapsed,
            modifiers=replace(PlantModifiers(soil=SoilType.BASIC), **modifiers),
        )
        return state.with_plant(slot, plant)

    return build


@pytest.fixture
def recorded(event_bus):
    """Collect every event of the given types emitted on the test bus."""

    def subscribe(*event_types):
        seen = []
        for event_type in event_types:
            event_bus.subscribe(event_type, seen.append)
        return seen

    return subscribe


@pytest.fixture
def scripted():
    """The ``ScriptedRandom`` class, for pure functions that take an RNG directly."""
    return ScriptedRandom
