"""Employee-driven automation of plant care.

Each slot has one AutomationState. During a pass every enabled slot with
a hired, assigned employee runs its actions in a fixed order: harvest
(then replant into the emptied slot), water, fertilize. Each action goes
through the same command the player uses, so the usual cooldown, funds and
one-shot gates apply; a refused action is simply skipped.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple

from growsim.catalog.types import Employee, SoilType, Specialization
from growsim.context import SimContext
from growsim.harvest.harvesting import harvest
from growsim.plants.care import CareAction, fertilize, remaining_cooldown, water
from growsim.plants.growth import is_harvest_ready, plant_seed
from growsim.result import FailureReason, Result, fail, ok
from growsim.state import AutomationState, GameState, resolve_strain

logger = logging.getLogger(__name__)


def employee_skill(employee: Employee, ctx: SimContext) -> float:
    """Skill bonus an employee contributes in place of a player's timing bonus."""
    return (employee.efficiency - 1.0) * ctx.config.automation.skill_scale


def hire_employee(
    state: GameState, ctx: SimContext, employee_id: str
) -> Tuple[GameState, Result[str, FailureReason]]:
    employee = ctx.catalog.employees.get(employee_id)
    if employee is None:
        return state, fail(FailureReason.UNKNOWN_EMPLOYEE)
    if employee_id in state.employees:
        return state, fail(FailureReason.ALREADY_OWNED)
    if state.nugs < employee.price:
        return state, fail(FailureReason.INSUFFICIENT_FUNDS)
    logger.debug("Hired %s for %d nugs", employee_id, employee.price)
    return replace(state, nugs=state.nugs - employee.price, employees=state.employees + (employee_id,)), ok(employee_id)


def assign_employee(
    state: GameState, ctx: SimContext, slot: int, employee_id: Optional[str]
) -> Tuple[GameState, Result[int, FailureReason]]:
    """Put a hired employee on a slot, or clear the slot with ``None``."""
    if not state.has_slot(slot):
        return state, fail(FailureReason.UNKNOWN_SLOT)
    if employee_id is not None:
        if employee_id not in ctx.catalog.employees:
            return state, fail(FailureReason.UNKNOWN_EMPLOYEE)
        if employee_id not in state.employees:
            return state, fail(FailureReason.NOT_HIRED)
    automation = replace(state.automation[slot], employee_id=employee_id)
    return state.with_automation(slot, automation), ok(slot)


def configure_automation(
    state: GameState,
    ctx: SimContext,
    slot: int,
    enabled: bool,
    replant_strain_id: Optional[str] = None,
) -> Tuple[GameState, Result[int, FailureReason]]:
    if not state.has_slot(slot):
        return state, fail(FailureReason.UNKNOWN_SLOT)
    if replant_strain_id is not None and resolve_strain(state, ctx.catalog, replant_strain_id) is None:
        return state, fail(FailureReason.UNKNOWN_STRAIN)
    automation = replace(state.automation[slot], enabled=enabled, replant_strain_id=replant_strain_id)
    return state.with_automation(slot, automation), ok(slot)


def set_slot_automation(
    state: GameState,
    ctx: SimContext,
    slot: int,
    employee_id: Optional[str],
    enabled: bool,
    replant_strain_id: Optional[str] = None,
) -> Tuple[GameState, Result[int, FailureReason]]:
    """Assign and configure a slot in one step; nothing changes if either part is refused."""
    assigned, result = assign_employee(state, ctx, slot, employee_id)
    if result.is_err():
        return state, result
    configured, result = configure_automation(assigned, ctx, slot, enabled, replant_strain_id)
    if result.is_err():
        return state, result
    return configured, result


def _assigned_employee(state: GameState, ctx: SimContext, automation: AutomationState) -> Optional[Employee]:
    if not automation.enabled or automation.employee_id is None:
        return None
    if automation.employee_id not in state.employees:
        return None
    return ctx.catalog.employees.get(automation.employee_id)


def _run_slot(state: GameState, ctx: SimContext, slot: int, now: float) -> GameState:
    automation = state.automation[slot]
    employee = _assigned_employee(state, ctx, automation)
    if employee is None:
        return state
    skill = employee_skill(employee, ctx)
    spec = employee.specialization

    if spec.covers(Specialization.HARVESTING) and is_harvest_ready(state, ctx, slot):
        state, result = harvest(state, ctx, slot, now)
        if result.is_ok():
            logger.debug("Automation harvested slot %d", slot)
            if automation.replant_strain_id is not None:
                soil = SoilType(ctx.config.automation.replant_soil)
                state, _ = plant_seed(state, ctx, slot, automation.replant_strain_id, soil, now)

    plant = state.plant_at(slot)
    if plant is None:
        return state

    if spec.covers(Specialization.WATERING):
        if remaining_cooldown(state, ctx, slot, CareAction.WATER, now) <= 0:
            state, _ = water(state, ctx, slot, skill_bonus=skill, now=now)

    if spec.covers(Specialization.FERTILIZING):
        plant = state.plant_at(slot)
        if (
            plant is not None
            and not plant.modifiers.fertilizer_applied
            and plant.phase in ctx.config.automation.auto_fertilize_phases
        ):
            state, _ = fertilize(state, ctx, slot, now=now)
    return state


def run_automation(state: GameState, ctx: SimContext, now: float) -> GameState:
    """One automation pass over every slot."""
    for slot in range(min(len(state.slots), len(state.automation))):
        state = _run_slot(state, ctx, slot, now)
    return state
