from __future__ import annotations
from typing import Dict, Type

from wordlebench.engine import Attempts, AttemptsKey, Puzzle

# ---- Global strategy registry ----
REGISTRY: Dict[str, Type["Strategy"]] = {}


def register(cls: Type["Strategy"]) -> Type["Strategy"]:
    """
    Decorator: @register on a strategy class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate strategy id: {sid}")
    REGISTRY[sid] = cls
    return cls


# ---- Base class that strategies inherit ----
class Strategy:
    """
    A Wordle strategy the harness can evaluate.

    Subclasses implement:
      - solve(puzzle, key): unlock `key` exactly once, call `puzzle.check`
        at most six times with that ledger, and return the ledger.
      - version():  changes whenever the strategy's logic changes, so that
        saved baselines stay meaningful.
      - hardmode(): whether the strategy plays by hardmode rules. Fixed for
        the lifetime of an instance.

    `str(strategy)` is the display name used in reports (no line breaks).
    Instances are shared between worker threads during a run, so `solve`
    must not keep per-puzzle state on `self`.
    """
    id = "base"
    name = "Base"

    def solve(self, puzzle: Puzzle, key: AttemptsKey) -> Attempts:
        raise NotImplementedError("Override in subclass")

    def version(self) -> str:
        return "0.0.0"

    def hardmode(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self} v{self.version()}>"
