from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Optional

from .models import CarSnapshot, CarState
from .state import CarStateMachine

logger = logging.getLogger(__name__)

Notifier = Callable[[int, CarState], None]


@dataclass
class Car:
    """One elevator car: its floor, motion state and destination queue.

    Only the car's own driver mutates these fields. ``snapshot`` and the
    floor/state writes share a lock, so a reader on another thread always
    sees a floor and state that were published together.
    """

    car_id: int
    current_floor: int = 1
    notify: Optional[Notifier] = field(default=None, repr=False, compare=False)
    machine: CarStateMachine = field(default_factory=CarStateMachine)
    queue: Deque[int] = field(default_factory=deque)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)
    _driving: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        logger.info("Car %s created at floor %s", self.car_id, self.current_floor)

    @property
    def state(self) -> CarState:
        return self.machine.current_type()

    def bind(self, notify: Notifier) -> None:
        self.notify = notify

    def enqueue(self, floor: int) -> None:
        with self._lock:
            self.queue.append(floor)
        logger.info("Car %s received request for floor %s", self.car_id, floor)
        if self._driving:
            # placed from a sink mid-walk; the running drain serves it next
            return
        self._drain()

    def drive_to_next(self) -> None:
        if self._driving or not self.queue:
            return
        self._driving = True
        try:
            self._drive_head()
        finally:
            self._driving = False

    def snapshot(self) -> CarSnapshot:
        with self._lock:
            pending = tuple(self.queue)
            return CarSnapshot(
                car_id=self.car_id,
                current_floor=self.current_floor,
                state=self.state,
                pending=pending,
                backlog=len(pending),
            )

    def _drain(self) -> None:
        """Serve queued floors until the queue is empty.

        A failing sink aborts only the walk it interrupted. The remaining
        floors are still served and the first error is raised afterwards.
        """
        self._driving = True
        first_error: Optional[Exception] = None
        try:
            while self.queue:
                try:
                    self._drive_head()
                except Exception as exc:
                    if first_error is not None:
                        logger.exception("Car %s walk failed", self.car_id)
                    else:
                        first_error = exc
        finally:
            self._driving = False
        if first_error is not None:
            raise first_error

    def _drive_head(self) -> None:
        target = self.queue[0]
        logger.info("Car %s processing request for floor %s", self.car_id, target)

        try:
            if target > self.current_floor:
                self._transition(self.machine.move_up)
                self._walk(target, 1)
            elif target < self.current_floor:
                self._transition(self.machine.move_down)
                self._walk(target, -1)
        finally:
            # queue and state are published together so snapshots never see
            # an empty queue on a moving car
            with self._lock:
                self.queue.popleft()
                stopped = self.machine.stop()
            if stopped:
                logger.info("Car %s changed state to %s", self.car_id, self.state.value)
        self._emit(self.current_floor, self.state)

    def _walk(self, target: int, step: int) -> None:
        while self.current_floor != target:
            with self._lock:
                self.current_floor += step
            logger.debug("Car %s is now at floor %s", self.car_id, self.current_floor)
            self._emit(self.current_floor, self.state)

    def _transition(self, event: Callable[[], bool]) -> None:
        with self._lock:
            changed = event()
        if changed:
            logger.info("Car %s changed state to %s", self.car_id, self.state.value)

    def _emit(self, floor: int, state: CarState) -> None:
        if self.notify is not None:
            self.notify(floor, state)
