from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from selection.nearest import NearestCarStrategy

from .car import Car
from .errors import InvalidRequest
from .models import CallRequest, CarSnapshot, CarState, Direction

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from selection.interface import SelectionStrategy

    from .panel import NotificationSink

logger = logging.getLogger(__name__)


class Dispatcher:
    """Owns the fleet, routes hall calls to cars and fans out car updates."""

    def __init__(
        self,
        strategy: Optional["SelectionStrategy"] = None,
        lowest_floor: Optional[int] = None,
        highest_floor: Optional[int] = None,
    ) -> None:
        if lowest_floor is not None and highest_floor is not None and highest_floor < lowest_floor:
            raise ValueError("highest_floor must not be below lowest_floor")
        self.lowest_floor = lowest_floor
        self.highest_floor = highest_floor
        self._strategy: "SelectionStrategy" = strategy or NearestCarStrategy()
        self._cars: List[Car] = []
        self._sinks: List["NotificationSink"] = []
        self._broadcast_lock = threading.RLock()

    @property
    def cars(self) -> Sequence[Car]:
        return tuple(self._cars)

    @property
    def sinks(self) -> Sequence["NotificationSink"]:
        return tuple(self._sinks)

    @property
    def strategy(self) -> "SelectionStrategy":
        return self._strategy

    def add_car(self, car: Car) -> None:
        if self._get_car(car.car_id) is not None:
            raise ValueError(f"Car {car.car_id} is already part of the fleet")
        car.bind(self.broadcast)
        self._cars.append(car)

    def register_sink(self, sink: "NotificationSink") -> None:
        self._sinks.append(sink)

    def set_strategy(self, strategy: "SelectionStrategy") -> None:
        self._strategy = strategy
        logger.info("Selection strategy set to %s", type(strategy).__name__)

    def use_strategy(self, name: str, **options) -> None:
        from selection import get_strategy

        self.set_strategy(get_strategy(name, **options))

    def submit_request(self, floor: int, direction: Union[Direction, str, int]) -> Optional[int]:
        """Route a hall call to a car and run it to completion.

        Returns the id of the car that served the call, or ``None`` when the
        fleet is empty.
        """
        request = self._validate(floor, direction)
        logger.info("Request received for floor %s (%s)", request.floor, request.direction.name)

        chosen = self._strategy.select_car(request.floor, request.direction, self.snapshot())
        if chosen is None:
            logger.debug("No car available for floor %s, dropping request", request.floor)
            return None

        car = self._get_car(chosen.car_id)
        if car is None:
            logger.warning("Strategy chose unknown car %s, dropping request", chosen.car_id)
            return None
        logger.info("Car %s selected for floor %s", car.car_id, request.floor)
        self._assign(car, request.floor)
        return car.car_id

    def broadcast(self, floor: int, state: CarState) -> None:
        with self._broadcast_lock:
            for sink in list(self._sinks):
                sink.on_update(floor, state)

    def snapshot(self) -> List[CarSnapshot]:
        return [self._snapshot_car(car) for car in self._cars]

    def _assign(self, car: Car, floor: int) -> None:
        car.enqueue(floor)

    def _snapshot_car(self, car: Car) -> CarSnapshot:
        return car.snapshot()

    def _validate(self, floor: int, direction: Union[Direction, str, int]) -> CallRequest:
        if isinstance(floor, bool) or not isinstance(floor, int):
            raise InvalidRequest(f"Floor must be an integer, got {floor!r}")
        if self.lowest_floor is not None and floor < self.lowest_floor:
            raise InvalidRequest(f"Floor {floor} is below the lowest floor {self.lowest_floor}")
        if self.highest_floor is not None and floor > self.highest_floor:
            raise InvalidRequest(f"Floor {floor} is above the highest floor {self.highest_floor}")
        return CallRequest(floor=floor, direction=Direction.parse(direction))

    def _get_car(self, car_id: int) -> Optional[Car]:
        for car in self._cars:
            if car.car_id == car_id:
                return car
        return None
