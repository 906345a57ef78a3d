from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from .errors import InvalidRequest


class Direction(Enum):
    """Direction a hall call asks to travel in."""

    UP = 1
    DOWN = -1

    @classmethod
    def parse(cls, value: Union["Direction", str, int]) -> "Direction":
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        elif isinstance(value, int) and not isinstance(value, bool):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidRequest(f"Unknown direction {value!r}. Expected UP or DOWN")


class CarState(Enum):
    IDLE = "IDLE"
    MOVING_UP = "MOVING_UP"
    MOVING_DOWN = "MOVING_DOWN"


MOVING_STATE = {
    Direction.UP: CarState.MOVING_UP,
    Direction.DOWN: CarState.MOVING_DOWN,
}


@dataclass(frozen=True)
class CarSnapshot:
    """Point-in-time view of a car for selection decisions."""

    car_id: int
    current_floor: int
    state: CarState
    pending: Tuple[int, ...] = ()
    backlog: int = 0

    @property
    def is_idle(self) -> bool:
        return self.state is CarState.IDLE

    def is_moving(self, direction: Direction) -> bool:
        return self.state is MOVING_STATE[direction]

    def distance_to(self, floor: int) -> int:
        return abs(floor - self.current_floor)

    def to_dict(self) -> dict:
        return {
            "id": self.car_id,
            "floor": self.current_floor,
            "state": self.state.value,
            "pending": list(self.pending),
            "backlog": self.backlog,
        }


@dataclass(frozen=True)
class CallRequest:
    """A hall call: the floor it was made from and the requested direction."""

    floor: int
    direction: Direction


@dataclass(frozen=True)
class NotificationEvent:
    floor: int
    state: CarState

    def to_dict(self) -> dict:
        return {"floor": self.floor, "state": self.state.value}
