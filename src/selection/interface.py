from __future__ import annotations

from typing import Optional, Protocol, Sequence

from fleet.models import CarSnapshot, Direction


class SelectionStrategy(Protocol):
    """Strategy interface for choosing which car serves a hall call."""

    def select_car(
        self,
        floor: int,
        direction: Direction,
        fleet: Sequence[CarSnapshot],
    ) -> Optional[CarSnapshot]:
        """
        Return the snapshot of the car that should serve ``floor``.

        ``fleet`` is in fleet order. Implementations must not mutate it and
        return ``None`` only when the fleet is empty.
        """
        ...
