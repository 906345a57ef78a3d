from __future__ import annotations

from typing import Optional, Sequence

from fleet.models import CarSnapshot, Direction

from .utils import approaching


class NearestCarStrategy:
    """Prefers the closest idle car, or the closest car already heading to the call.

    The first car in the fleet is the fallback: it is kept unless some other
    car qualifies with a strictly smaller distance, so ties go to the earlier
    car.
    """

    def select_car(
        self,
        floor: int,
        direction: Direction,
        fleet: Sequence[CarSnapshot],
    ) -> Optional[CarSnapshot]:
        if not fleet:
            return None

        best = fleet[0]
        best_distance = best.distance_to(floor)
        for car in fleet[1:]:
            distance = car.distance_to(floor)
            if distance >= best_distance:
                continue
            if car.is_idle or approaching(car, floor, direction):
                best = car
                best_distance = distance
        return best
