from __future__ import annotations

from typing import Optional, Sequence

from fleet.models import CarSnapshot, Direction


class RoundRobinStrategy:
    """Hands calls to each car in fleet order, regardless of position."""

    def __init__(self, start: int = 0) -> None:
        self._cursor = max(0, start)

    def select_car(
        self,
        floor: int,
        direction: Direction,
        fleet: Sequence[CarSnapshot],
    ) -> Optional[CarSnapshot]:
        if not fleet:
            return None
        chosen = fleet[self._cursor % len(fleet)]
        self._cursor = (self._cursor + 1) % len(fleet)
        return chosen
