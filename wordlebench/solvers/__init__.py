from __future__ import annotations
from typing import List
from .base import Strategy, REGISTRY, register

from . import stupid  # noqa: F401
from . import basic  # noqa: F401
from . import common  # noqa: F401
from . import random_consistent  # noqa: F401

from .stupid import Stupid
from .basic import Basic
from .common import Common
from .random_consistent import RandomConsistent


def create_strategy(strategy_id: str, **kwargs) -> Strategy:
    """
    Factory: instantiate a registered strategy by id.
    Keyword arguments are passed to the strategy's constructor.
    """
    try:
        cls = REGISTRY[strategy_id]
    except KeyError as e:
        raise ValueError(
            f"Unknown strategy id: {strategy_id}. Available: {sorted(REGISTRY.keys())}") from e
    return cls(**kwargs)


def get_strategy_ids() -> List[str]:
    """
    Return all registered strategy ids (sorted for stable CLI help).
    """
    return sorted(REGISTRY.keys())


__all__ = [
    "Strategy", "REGISTRY", "register", "create_strategy", "get_strategy_ids",
    "Stupid", "Basic", "Common", "RandomConsistent",
]
