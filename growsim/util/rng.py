"""RNG utilities for deterministic simulation.

Every random draw in the core (mutation rolls, market volatility, event
selection, pest rolls, haggling) goes through the ``random.Random`` owned by
the ``SimContext``. These helpers fail loudly when that instance is missing
instead of silently creating an unseeded fallback.
"""

import random
from typing import Any, Optional


class MissingRNGError(RuntimeError):
    """Raised when an RNG is required but not available.

    This indicates a bug in the caller setup: every command and tick must be
    given the context RNG.
    """


def require_rng_param(rng: Optional[random.Random], context: str) -> random.Random:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Args:
        rng: The RNG that should have been provided
        context: Description of where this is called from (for error messages)

    Returns:
        The validated RNG

    Raises:
        MissingRNGError: If rng is None
    """
    if rng is None:
        raise MissingRNGError(f"RNG required: {context}. Pass the context RNG explicitly.")
    return rng


def require_rng(ctx: Any, context: str = "unknown") -> random.Random:
    """Get the RNG from a context object, failing loudly if unavailable.

    Example:
        rng = require_rng(ctx, "genetics.breed")
        jitter = rng.uniform(0.9, 1.1)
    """
    if ctx is None:
        raise MissingRNGError(f"Cannot get RNG: context is None (context: {context}).")
    rng = getattr(ctx, "rng", None)
    if rng is None:
        raise MissingRNGError(
            f"Cannot get RNG: context has no 'rng' attribute (context: {context})."
        )
    return rng


def weighted_choice(rng: random.Random, items, weights):
    """Pick one item with the given relative weights using ``rng``."""
    return rng.choices(list(items), weights=list(weights), k=1)[0]
