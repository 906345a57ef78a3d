from __future__ import annotations

from typing import List, Tuple

import pytest

from fleet import Car, CarState, Dispatcher


class RecordingSink:
    def __init__(self) -> None:
        self.updates: List[Tuple[int, CarState]] = []

    def on_update(self, floor: int, state: CarState) -> None:
        self.updates.append((floor, state))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def two_car_dispatcher(sink: RecordingSink) -> Dispatcher:
    """Car 1 idle at floor 1, car 2 idle at floor 2."""
    dispatcher = Dispatcher(lowest_floor=1, highest_floor=10)
    dispatcher.add_car(Car(1, current_floor=1))
    dispatcher.add_car(Car(2, current_floor=2))
    dispatcher.register_sink(sink)
    return dispatcher
