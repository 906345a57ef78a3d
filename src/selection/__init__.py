from __future__ import annotations

from typing import Dict, Type

from .interface import SelectionStrategy
from .least_busy import LeastBusyStrategy
from .nearest import NearestCarStrategy
from .round_robin import RoundRobinStrategy

__all__ = [
    "LeastBusyStrategy",
    "NearestCarStrategy",
    "RoundRobinStrategy",
    "SelectionStrategy",
    "STRATEGY_REGISTRY",
    "get_strategy",
]


STRATEGY_REGISTRY: Dict[str, Type[SelectionStrategy]] = {
    "nearest": NearestCarStrategy,
    "least_busy": LeastBusyStrategy,
    "round_robin": RoundRobinStrategy,
}


def get_strategy(name: str, **kwargs) -> SelectionStrategy:
    cls = STRATEGY_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown strategy '{name}'. Available: {', '.join(STRATEGY_REGISTRY)}")
    return cls(**kwargs)
