"""Result type for explicit success/failure handling.

Every command in the core returns ``(new_state, result)``. Guard failures
(cooldown not elapsed, not enough nugs, unknown identifier) are ordinary
outcomes of play, so they come back as ``Err(FailureReason.X)`` instead of
exceptions. Callers check the result and leave the messaging to the
presentation layer.

Usage:
------
    state, result = water(state, ctx, slot=0, now=now)
    if result.is_ok():
        delta = result.unwrap()
    else:
        reason = result.error   # FailureReason.COOLDOWN, ...

    match result:
        case Ok(value):
            ...
        case Err(reason):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type


class FailureReason(str, Enum):
    """Closed set of reasons a command can refuse to run."""

    UNKNOWN_SLOT = "unknown_slot"
    EMPTY_SLOT = "empty_slot"
    SLOT_OCCUPIED = "slot_occupied"
    UNKNOWN_STRAIN = "unknown_strain"
    UNKNOWN_TECHNIQUE = "unknown_technique"
    UNKNOWN_ENHANCER = "unknown_enhancer"
    UNKNOWN_DEALER = "unknown_dealer"
    UNKNOWN_OFFER = "unknown_offer"
    UNKNOWN_NODE = "unknown_node"
    UNKNOWN_UPGRADE = "unknown_upgrade"
    UNKNOWN_EMPLOYEE = "unknown_employee"
    UNKNOWN_PHENOTYPE = "unknown_phenotype"
    UNKNOWN_MOTHER = "unknown_mother"
    UNKNOWN_INFESTATION = "unknown_infestation"
    UNKNOWN_TREATMENT = "unknown_treatment"
    UNKNOWN_BATCH = "unknown_batch"
    UNKNOWN_QUEST = "unknown_quest"
    UNKNOWN_PARAMETER = "unknown_parameter"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_BUDS = "insufficient_buds"
    INSUFFICIENT_POINTS = "insufficient_points"
    INSUFFICIENT_QUALITY = "insufficient_quality"
    COOLDOWN = "cooldown"
    MAX_WATER = "max_water"
    ALREADY_APPLIED = "already_applied"
    WRONG_PHASE = "wrong_phase"
    NOT_READY = "not_ready"
    MAX_LEVEL = "max_level"
    ALREADY_OWNED = "already_owned"
    NOT_HIRED = "not_hired"
    QUANTITY_OUT_OF_RANGE = "quantity_out_of_range"
    DEALER_LOCKED = "dealer_locked"
    DEALER_UNAVAILABLE = "dealer_unavailable"
    DEAL_BUSTED = "deal_busted"
    RELATIONSHIP_TOO_LOW = "relationship_too_low"
    RESEARCH_ACTIVE = "research_active"
    NO_ACTIVE_RESEARCH = "no_active_research"
    ALREADY_COMPLETED = "already_completed"
    PREREQUISITES_MISSING = "prerequisites_missing"
    CLONE_LIMIT = "clone_limit"
    INEFFECTIVE_TREATMENT = "ineffective_treatment"
    EVENT_ACTIVE = "event_active"
    EVENTS_DISABLED = "events_disabled"
    EVENT_NOT_ROLLED = "event_not_rolled"
    QUEST_INCOMPLETE = "quest_incomplete"
    ALREADY_CLAIMED = "already_claimed"
    INVALID_ARGUMENT = "invalid_argument"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful command outcome carrying its value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    @property
    def error(self) -> None:
        """Ok has no error, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """A refused command carrying the reason."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raises ValueError since Err has no success value."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    @property
    def value(self) -> None:
        """Err has no value, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]


def ok(value: T = None) -> Ok[T]:
    """Create an Ok, defaulting to Ok(None) for commands with no payload."""
    return Ok(value)


def fail(reason: FailureReason) -> Err[FailureReason]:
    """Create an Err carrying a failure reason."""
    return Err(reason)
