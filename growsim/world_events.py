"""Global random events (festival, mystic fog, ...).

At most one event is active. While it lasts it scales offer prices and
quantities, growth speed, curing duration and the perfect-timing window.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple

from growsim.catalog import Catalog
from growsim.catalog.types import GlobalEventPreset
from growsim.context import SimContext
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import ActiveEvent, GameState
from growsim.util.rng import require_rng

logger = logging.getLogger(__name__)


def active_event_preset(state: GameState, catalog: Catalog) -> Optional[GlobalEventPreset]:
    if state.event is None:
        return None
    return catalog.global_events.get(state.event.event_id)


def trigger_random_event(
    state: GameState, ctx: SimContext, now: float
) -> Tuple[GameState, Result[str, FailureReason]]:
    """Start a uniformly chosen event if events are enabled and none is active."""
    if not state.settings.random_events_enabled:
        return state, fail(FailureReason.EVENTS_DISABLED)
    if state.event is not None:
        return state, fail(FailureReason.EVENT_ACTIVE)
    presets = list(ctx.catalog.global_events.values())
    if not presets:
        return state, fail(FailureReason.INVALID_ARGUMENT)

    rng = require_rng(ctx, "world_events.trigger_random_event")
    preset = presets[rng.randrange(len(presets))]
    event = ActiveEvent(event_id=preset.id, started_at=now, ends_at=now + preset.duration)
    logger.info("Global event started: %s (until %.1f)", preset.id, event.ends_at)
    return replace(state, event=event), ok(preset.id)


def maybe_trigger_event(
    state: GameState, ctx: SimContext, now: float
) -> Tuple[GameState, Result[str, FailureReason]]:
    """Roll the periodic event chance, then trigger if it hits."""
    if state.event is not None or not state.settings.random_events_enabled:
        return trigger_random_event(state, ctx, now)
    rng = require_rng(ctx, "world_events.maybe_trigger_event")
    if rng.random() >= ctx.config.scheduler.random_event_chance:
        return state, fail(FailureReason.EVENT_NOT_ROLLED)
    return trigger_random_event(state, ctx, now)


def tick_event(state: GameState, ctx: SimContext, now: float) -> GameState:
    """Expire the active event once its end time has passed."""
    if state.event is not None and now >= state.event.ends_at:
        logger.debug("Global event ended: %s", state.event.event_id)
        return replace(state, event=None)
    return state
