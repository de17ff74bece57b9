"""Research points, progression and accumulated bonuses."""

from dataclasses import replace

import pytest

from growsim.catalog.types import Rarity
from growsim.config import ResearchConfig
from growsim.events import ResearchCompletedEvent
from growsim.research import (
    ResearchBonuses,
    add_research_points,
    available_research,
    cancel_research,
    compute_research_bonuses,
    harvest_research_points,
    progress_research,
    start_research,
    trade_research_points,
)
from growsim.result import FailureReason
from growsim.state import ActiveResearch


def _with_points(state, points, completed=()):
    return replace(state, research=replace(state.research, points=points, completed=tuple(completed)))


@pytest.mark.parametrize(
    "score,rarity,expected",
    [
        (1.0, Rarity.COMMON, 10),
        (1.26, Rarity.RARE, 18),
        (0.95, Rarity.EPIC, 18),
        (1.5, Rarity.LEGENDARY, 45),
        (-0.2, Rarity.COMMON, 0),
    ],
)
def test_harvest_points(score, rarity, expected):
    assert harvest_research_points(score, rarity, ResearchConfig()) == expected


@pytest.mark.parametrize("quantity,expected", [(1, 1), (49, 1), (50, 1), (120, 2), (500, 10)])
def test_trade_points(quantity, expected):
    assert trade_research_points(quantity, ResearchConfig()) == expected


def test_points_never_go_negative(fresh_state):
    state = add_research_points(_with_points(fresh_state, 5), -20)
    assert state.research.points == 0
    assert add_research_points(state, 0) is state


def test_start_spends_points(ctx, fresh_state):
    state, result = start_research(_with_points(fresh_state, 150), ctx, "basic-led", now=3.0)

    assert result.value == "basic-led"
    assert state.research.points == 50
    assert state.research.active == ActiveResearch(node_id="basic-led", progress=0.0, started_at=3.0)


@pytest.mark.parametrize(
    "node_id,points,completed,reason",
    [
        ("warp-drive", 1000, (), FailureReason.UNKNOWN_NODE),
        ("basic-led", 1000, ("basic-led",), FailureReason.ALREADY_COMPLETED),
        ("advanced-spectrum", 1000, (), FailureReason.PREREQUISITES_MISSING),
        ("basic-led", 99, (), FailureReason.INSUFFICIENT_POINTS),
    ],
)
def test_start_refusals(ctx, fresh_state, node_id, points, completed, reason):
    state = _with_points(fresh_state, points, completed)
    unchanged, result = start_research(state, ctx, node_id)
    assert result.error is reason
    assert unchanged is state


def test_only_one_node_at_a_time(ctx, fresh_state):
    state, _ = start_research(_with_points(fresh_state, 500), ctx, "basic-led")
    _, result = start_research(state, ctx, "organic-nutrients")
    assert result.error is FailureReason.RESEARCH_ACTIVE


def test_cancel_forfeits_points(ctx, fresh_state):
    state, _ = start_research(_with_points(fresh_state, 100), ctx, "basic-led")
    state, result = cancel_research(state, ctx)

    assert result.value == "basic-led"
    assert state.research.active is None
    assert state.research.points == 0

    _, result = cancel_research(state, ctx)
    assert result.error is FailureReason.NO_ACTIVE_RESEARCH


def test_progress_reaches_completion(ctx, fresh_state, recorded):
    seen = recorded(ResearchCompletedEvent)
    state, _ = start_research(_with_points(fresh_state, 100), ctx, "basic-led")

    state = progress_research(state, ctx)
    assert state.research.active.progress == pytest.approx(5.0)

    for _ in range(19):
        state = progress_research(state, ctx)

    assert state.research.active is None
    assert state.research.completed == ("basic-led",)
    assert [event.node_id for event in seen] == ["basic-led"]


def test_progress_is_capped_and_idle_without_active_node(ctx, fresh_state):
    state, _ = start_research(_with_points(fresh_state, 100), ctx, "basic-led")
    state = progress_research(state, ctx, amount=500.0)
    assert state.research.completed == ("basic-led",)
    assert progress_research(state, ctx) is state


def test_available_research_follows_prerequisites(catalog, fresh_state):
    roots = {node.id for node in available_research(fresh_state, catalog)}
    assert roots == {"basic-led", "organic-nutrients", "climate-control", "pheno-hunting", "auto-watering"}

    state = _with_points(fresh_state, 0, ("basic-led",))
    unlocked = {node.id for node in available_research(state, catalog)}
    assert {"advanced-spectrum", "uv-supplementation"} <= unlocked
    assert "basic-led" not in unlocked


class TestBonuses:
    def test_empty_set_is_neutral(self, catalog):
        bonuses = compute_research_bonuses((), catalog)
        assert bonuses.yield_multiplier == 1.0
        assert bonuses.time_reduction == 0.0
        assert not bonuses.has_feature("pheno_selection")

    def test_yield_compounds_and_others_add(self, catalog):
        bonuses = compute_research_bonuses(
            ("basic-led", "advanced-spectrum", "uv-supplementation", "pheno-hunting"), catalog
        )
        assert bonuses.yield_multiplier == pytest.approx(1.1 * 1.2)
        assert bonuses.terpene_boost == pytest.approx(40)
        assert bonuses.quality_boost == pytest.approx(20)
        assert bonuses.cost_reductions == {"electricity": pytest.approx(0.15)}
        assert bonuses.has_feature("pheno_selection")

    def test_yield_capped_at_five(self, catalog):
        bonuses = compute_research_bonuses(tuple(catalog.research), catalog)
        assert bonuses.yield_multiplier == pytest.approx(5.0)

    def test_time_reduction_cap_follows_config(self, catalog):
        completed = ("custom-feeding", "co2-injection", "full-automation")
        assert compute_research_bonuses(completed, catalog).time_reduction == pytest.approx(0.3)
        capped = compute_research_bonuses(completed, catalog, ResearchConfig(time_reduction_cap=0.2))
        assert capped.time_reduction == pytest.approx(0.2)

    def test_unknown_nodes_are_skipped(self, catalog):
        assert compute_research_bonuses(("retired-node",), catalog).yield_multiplier == 1.0

    def test_discounted_prices(self, catalog):
        bonuses = compute_research_bonuses(("drip-irrigation", "living-soil"), catalog)
        assert bonuses.discounted("water", 5) == 4
        assert bonuses.discounted("nutrients", 15) == 11
        assert bonuses.discounted("seeds", 50) == 50

    def test_discount_is_capped(self):
        bonuses = ResearchBonuses(cost_reductions={"water": 0.4, "all": 0.4})
        assert bonuses.discounted("water", 100) == 50
        assert bonuses.discounted("nutrients", 100) == 60
