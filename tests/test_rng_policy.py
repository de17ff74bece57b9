import ast
from pathlib import Path
from types import SimpleNamespace
from typing import List, Optional, Set, Tuple

import pytest

from growsim import SimContext, initial_state
from growsim.genetics import breed
from growsim.market import generate_offers, update_market_data
from growsim.plants import check_for_pests, drift_environment_values, plant_seed
from growsim.util.rng import MissingRNGError, require_rng, require_rng_param

ALLOWED_RANDOM_ATTRS = {"Random", "SystemRandom"}


def _iter_sim_files() -> List[Path]:
    sim_root = Path(__file__).resolve().parents[1] / "growsim"
    return [path for path in sim_root.rglob("*.py") if "__pycache__" not in path.parts]


def _collect_random_aliases(tree: ast.AST) -> Set[str]:
    aliases: Set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name == "random":
                    aliases.add(alias.asname or "random")
    return aliases


class _RandomUsageVisitor(ast.NodeVisitor):
    def __init__(self, random_aliases: Set[str]) -> None:
        self._aliases = random_aliases
        self._stack: List[ast.AST] = []
        self.violations: List[Tuple[int, str]] = []

    def visit(self, node: ast.AST) -> None:
        self._stack.append(node)
        method = "visit_" + node.__class__.__name__
        visitor = getattr(self, method, self.generic_visit)
        visitor(node)
        self._stack.pop()

    def _parent(self) -> Optional[ast.AST]:
        if len(self._stack) < 2:
            return None
        return self._stack[-2]

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        if node.module == "random":
            for alias in node.names:
                if alias.name not in ALLOWED_RANDOM_ATTRS:
                    self.violations.append((node.lineno, f"from random import {alias.name}"))
        self.generic_visit(node)

    def visit_Attribute(self, node: ast.Attribute) -> None:
        if isinstance(node.value, ast.Name) and node.value.id in self._aliases:
            if node.attr not in ALLOWED_RANDOM_ATTRS:
                self.violations.append((node.lineno, f"{node.value.id}.{node.attr}"))
        self.generic_visit(node)

    def visit_Name(self, node: ast.Name) -> None:
        if node.id in self._aliases:
            parent = self._parent()
            if isinstance(parent, ast.Attribute) and parent.value is node:
                return
            self.violations.append((node.lineno, node.id))
        self.generic_visit(node)


def test_no_global_random_usage_in_simulation() -> None:
    """Simulation code should avoid global random module usage."""
    violations: List[str] = []
    for path in _iter_sim_files():
        source = path.read_text(encoding="utf-8", errors="ignore")
        tree = ast.parse(source, filename=str(path))
        aliases = _collect_random_aliases(tree)
        visitor = _RandomUsageVisitor(aliases)
        visitor.visit(tree)
        for line, detail in visitor.violations:
            violations.append(f"{path}:{line}: {detail}")

    assert not violations, "Global random usage detected:\n" + "\n".join(sorted(violations))


class _UnseededRandomFinder(ast.NodeVisitor):
    """AST visitor that finds calls to random.Random() with no seed arguments."""

    def __init__(self, random_aliases: Set[str]) -> None:
        self._aliases = random_aliases
        self.violations: List[Tuple[int, str]] = []

    def visit_Call(self, node: ast.Call) -> None:
        func = node.func
        if (
            isinstance(func, ast.Attribute)
            and func.attr == "Random"
            and isinstance(func.value, ast.Name)
            and func.value.id in self._aliases
            and not node.args
            and not node.keywords
        ):
            self.violations.append((node.lineno, "random.Random() called with no seed"))
        self.generic_visit(node)


def test_no_unseeded_random_in_simulation() -> None:
    """Simulation code must not fall back to an unseeded random.Random().

    Patterns like ``rng = rng or random.Random()`` silently break replay
    when a call site forgets the context RNG; use require_rng() instead.
    """
    violations: List[str] = []
    for path in _iter_sim_files():
        source = path.read_text(encoding="utf-8", errors="ignore")
        tree = ast.parse(source, filename=str(path))
        visitor = _UnseededRandomFinder(_collect_random_aliases(tree))
        visitor.visit(tree)
        for line, detail in visitor.violations:
            violations.append(f"{path}:{line}: {detail}")

    assert not violations, "Unseeded RNG detected:\n" + "\n".join(sorted(violations))


def test_require_rng_fails_loudly() -> None:
    with pytest.raises(MissingRNGError):
        require_rng(None, "test")
    with pytest.raises(MissingRNGError):
        require_rng(SimpleNamespace(rng=None), "test")
    with pytest.raises(MissingRNGError):
        require_rng_param(None, "test")


def _scripted_session(seed: int):
    ctx = SimContext.seeded(seed)
    state = initial_state(ctx.catalog)
    state, _ = plant_seed(state, ctx, 0, "green-gelato")
    state, _ = plant_seed(state, ctx, 1, "honey-cream")
    state, _ = breed(state, ctx, "green-gelato", "honey-cream")
    for step in range(20):
        now = float(step)
        state = update_market_data(state, ctx, now)
        state = check_for_pests(state, ctx, now)
        state = drift_environment_values(state, ctx)
    state = generate_offers(state, ctx, 20.0)
    return state


def test_same_seed_same_game() -> None:
    assert _scripted_session(1234) == _scripted_session(1234)


def test_different_seed_diverges() -> None:
    assert _scripted_session(1) != _scripted_session(2)
