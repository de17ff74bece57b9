"""Starter quests and global random events."""

from dataclasses import replace

import pytest

from growsim.catalog.types import QuestType
from growsim.plants import water
from growsim.quests import claim_quest, record_quest_progress
from growsim.result import FailureReason
from growsim.world_events import active_event_preset, maybe_trigger_event, tick_event, trigger_random_event


def _progress(state, quest_id):
    return next(q for q in state.quests if q.quest_id == quest_id)


def test_fresh_game_lists_every_quest(fresh_state):
    assert [q.quest_id for q in fresh_state.quests] == ["harvest-3", "sell-100", "water-10"]
    assert all(q.progress == 0 and not q.claimed for q in fresh_state.quests)


def test_progress_only_touches_matching_type(ctx, fresh_state):
    state = record_quest_progress(fresh_state, ctx, QuestType.SELL, 40)
    assert _progress(state, "sell-100").progress == 40
    assert _progress(state, "harvest-3").progress == 0


def test_progress_capped_at_goal(ctx, fresh_state):
    state = record_quest_progress(fresh_state, ctx, QuestType.HARVEST, 10)
    assert _progress(state, "harvest-3").progress == 3
    assert record_quest_progress(state, ctx, QuestType.HARVEST, 1) is state


def test_non_positive_progress_is_ignored(ctx, fresh_state):
    assert record_quest_progress(fresh_state, ctx, QuestType.WATER, 0) is fresh_state


def test_watering_counts_toward_quest(ctx, fresh_state, grow):
    state, _ = water(grow(fresh_state, phase=1), ctx, 0, now=0.0)
    assert _progress(state, "water-10").progress == 1


def test_claim_pays_nugs_once(ctx, fresh_state):
    state = record_quest_progress(fresh_state, ctx, QuestType.HARVEST, 3)
    state, result = claim_quest(state, ctx, "harvest-3")

    assert result.value == 75
    assert state.nugs == fresh_state.nugs + 75
    assert _progress(state, "harvest-3").claimed is True

    unchanged, result = claim_quest(state, ctx, "harvest-3")
    assert result.error is FailureReason.ALREADY_CLAIMED
    assert unchanged is state


def test_claimed_quest_stops_progressing(ctx, fresh_state):
    state = record_quest_progress(fresh_state, ctx, QuestType.HARVEST, 3)
    state, _ = claim_quest(state, ctx, "harvest-3")
    assert record_quest_progress(state, ctx, QuestType.HARVEST, 1) is state


def test_claim_pays_buds(ctx, fresh_state):
    state = record_quest_progress(fresh_state, ctx, QuestType.WATER, 10)
    state, result = claim_quest(state, ctx, "water-10")
    assert result.value == 20
    assert state.buds == fresh_state.buds + 20


@pytest.mark.parametrize(
    "quest_id,reason",
    [("sell-100", FailureReason.QUEST_INCOMPLETE), ("dance-off", FailureReason.UNKNOWN_QUEST)],
)
def test_claim_refusals(ctx, fresh_state, quest_id, reason):
    _, result = claim_quest(fresh_state, ctx, quest_id)
    assert result.error is reason


class TestGlobalEvents:
    def test_trigger_starts_event_with_duration(self, scripted_ctx, fresh_state, catalog):
        state, result = trigger_random_event(fresh_state, scripted_ctx(0.0), now=10.0)

        assert result.value == "festival"
        assert state.event.started_at == 10.0
        assert state.event.ends_at == pytest.approx(70.0)
        assert active_event_preset(state, catalog).price_multiplier == pytest.approx(1.5)

    def test_only_one_event_at_a_time(self, scripted_ctx, fresh_state):
        state, _ = trigger_random_event(fresh_state, scripted_ctx(0.0), now=0.0)
        unchanged, result = trigger_random_event(state, scripted_ctx(0.0), now=1.0)
        assert result.error is FailureReason.EVENT_ACTIVE
        assert unchanged is state

    def test_disabled_events(self, ctx, fresh_state):
        state = replace(fresh_state, settings=replace(fresh_state.settings, random_events_enabled=False))
        _, result = trigger_random_event(state, ctx, now=0.0)
        assert result.error is FailureReason.EVENTS_DISABLED
        _, result = maybe_trigger_event(state, ctx, now=0.0)
        assert result.error is FailureReason.EVENTS_DISABLED

    def test_periodic_roll_misses(self, scripted_ctx, fresh_state):
        state, result = maybe_trigger_event(fresh_state, scripted_ctx(0.2), now=0.0)
        assert result.error is FailureReason.EVENT_NOT_ROLLED
        assert state.event is None

    def test_periodic_roll_hits(self, scripted_ctx, fresh_state):
        state, result = maybe_trigger_event(fresh_state, scripted_ctx(0.1, 0.0), now=0.0)
        assert result.value == "festival"
        assert state.event is not None

    def test_event_expires_at_end_time(self, scripted_ctx, ctx, fresh_state):
        state, _ = trigger_random_event(fresh_state, scripted_ctx(0.0), now=0.0)
        assert tick_event(state, ctx, now=59.9) is state
        assert tick_event(state, ctx, now=60.0).event is None

    def test_no_preset_without_event(self, fresh_state, catalog):
        assert active_event_preset(fresh_state, catalog) is None
