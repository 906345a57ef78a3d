from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, List, Optional, Protocol, Union

from .models import CarState, Direction, NotificationEvent

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Receiver of car updates broadcast by the dispatcher."""

    def on_update(self, floor: int, state: CarState) -> None:
        ...


class FloorPanel:
    """Hall panel on one floor: places calls and shows where a car is."""

    def __init__(self, floor: int, dispatcher: "Dispatcher") -> None:
        self.floor = floor
        self.dispatcher = dispatcher
        self.display_floor: int = dispatcher.lowest_floor if dispatcher.lowest_floor is not None else 1
        self.display_state: CarState = CarState.IDLE
        logger.info("Panel created at floor %s", floor)

    def request_elevator(self, direction: Union[Direction, str, int]) -> Optional[int]:
        logger.info("Panel at floor %s requesting elevator", self.floor)
        return self.dispatcher.submit_request(self.floor, direction)

    def on_update(self, floor: int, state: CarState) -> None:
        self.display_floor = floor
        self.display_state = state
        logger.debug("Panel at floor %s shows car at floor %s (%s)", self.floor, floor, state.value)


class EventLog:
    """Sink that keeps every update in arrival order until drained."""

    def __init__(self) -> None:
        self._events: List[NotificationEvent] = []
        self._lock = threading.Lock()

    def on_update(self, floor: int, state: CarState) -> None:
        with self._lock:
            self._events.append(NotificationEvent(floor=floor, state=state))

    @property
    def events(self) -> List[NotificationEvent]:
        with self._lock:
            return list(self._events)

    def drain(self) -> List[NotificationEvent]:
        with self._lock:
            events, self._events = self._events, []
        return events

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
