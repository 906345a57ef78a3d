from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .car import Car
from .dispatcher import Dispatcher
from .workers import ThreadedDispatcher


@dataclass
class FleetConfig:
    """Building and fleet layout used to assemble a dispatcher."""

    num_floors: int = 10
    lowest_floor: int = 1
    car_count: int = 2
    starting_floor: Optional[int] = None
    strategy: str = "nearest"
    strategy_options: dict = field(default_factory=dict)
    threaded: bool = False

    def __post_init__(self) -> None:
        if self.num_floors < 1:
            raise ValueError("num_floors must be at least 1")
        if self.car_count < 0:
            raise ValueError("car_count must not be negative")
        if self.starting_floor is None:
            self.starting_floor = self.lowest_floor
        if not self.lowest_floor <= self.starting_floor <= self.highest_floor:
            raise ValueError(
                f"starting_floor {self.starting_floor} is outside "
                f"{self.lowest_floor}..{self.highest_floor}"
            )

    @property
    def highest_floor(self) -> int:
        return self.lowest_floor + self.num_floors - 1

    @classmethod
    def from_dict(cls, data: dict) -> "FleetConfig":
        return cls(
            num_floors=data.get("num_floors", 10),
            lowest_floor=data.get("lowest_floor", 1),
            car_count=data.get("car_count", 2),
            starting_floor=data.get("starting_floor"),
            strategy=data.get("strategy", "nearest"),
            strategy_options=data.get("strategy_options", {}),
            threaded=data.get("threaded", False),
        )


def build_dispatcher(config: FleetConfig) -> Dispatcher:
    if config.threaded:
        dispatcher: Dispatcher = ThreadedDispatcher(
            lowest_floor=config.lowest_floor, highest_floor=config.highest_floor
        )
    else:
        dispatcher = Dispatcher(lowest_floor=config.lowest_floor, highest_floor=config.highest_floor)
    dispatcher.use_strategy(config.strategy, **config.strategy_options)
    for car_id in range(1, config.car_count + 1):
        dispatcher.add_car(Car(car_id, current_floor=config.starting_floor))
    return dispatcher
