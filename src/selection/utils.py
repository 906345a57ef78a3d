from __future__ import annotations

from fleet.models import CarSnapshot, Direction


def approaching(car: CarSnapshot, floor: int, direction: Direction) -> bool:
    """True when ``car`` travels in ``direction`` and has not yet passed ``floor``.

    A car exactly at the floor counts as having passed it.
    """

    if not car.is_moving(direction):
        return False
    if direction is Direction.UP:
        return car.current_floor < floor
    return car.current_floor > floor
