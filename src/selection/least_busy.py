from __future__ import annotations

from typing import Optional, Sequence

from fleet.models import CarSnapshot, Direction


class LeastBusyStrategy:
    """Assigns calls to the car with the shortest backlog of destinations."""

    def select_car(
        self,
        floor: int,
        direction: Direction,
        fleet: Sequence[CarSnapshot],
    ) -> Optional[CarSnapshot]:
        if not fleet:
            return None
        # min() keeps the first of equal keys, so ties fall back to fleet order
        return min(fleet, key=lambda car: (car.backlog, car.distance_to(floor)))
