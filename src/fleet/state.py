from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .models import CarState

MOVE_UP = "move_up"
MOVE_DOWN = "move_down"
STOP = "stop"

# (state, event) -> next state. Pairs not listed leave the state unchanged.
TRANSITIONS: Dict[Tuple[CarState, str], CarState] = {
    (CarState.IDLE, MOVE_UP): CarState.MOVING_UP,
    (CarState.IDLE, MOVE_DOWN): CarState.MOVING_DOWN,
    (CarState.MOVING_UP, MOVE_DOWN): CarState.MOVING_DOWN,
    (CarState.MOVING_UP, STOP): CarState.IDLE,
    (CarState.MOVING_DOWN, MOVE_UP): CarState.MOVING_UP,
    (CarState.MOVING_DOWN, STOP): CarState.IDLE,
}


@dataclass
class CarStateMachine:
    """Motion state of a single car.

    Each operation returns ``True`` when the state actually changed, so the
    owning car can report the transition. Repeating the current direction
    and stopping while idle are no-ops.
    """

    state: CarState = CarState.IDLE

    def move_up(self) -> bool:
        return self._fire(MOVE_UP)

    def move_down(self) -> bool:
        return self._fire(MOVE_DOWN)

    def stop(self) -> bool:
        return self._fire(STOP)

    def current_type(self) -> CarState:
        return self.state

    def _fire(self, event: str) -> bool:
        next_state = TRANSITIONS.get((self.state, event), self.state)
        if next_state is self.state:
            return False
        self.state = next_state
        return True
