from __future__ import annotations

import logging
import queue
import threading
from dataclasses import replace
from typing import Dict, Optional

from .car import Car
from .dispatcher import Dispatcher
from .models import CarSnapshot

logger = logging.getLogger(__name__)

_SHUTDOWN = None


class CarWorker:
    """Runs one car on its own thread, fed from a private inbox.

    The worker thread is the only caller of ``Car.enqueue`` for its car.
    """

    def __init__(self, car: Car) -> None:
        self.car = car
        self._inbox: "queue.Queue[Optional[int]]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def backlog(self) -> int:
        return self._inbox.qsize()

    def start(self) -> None:
        if self.running:
            return
        self._thread = threading.Thread(
            target=self._run, name=f"car-{self.car.car_id}", daemon=True
        )
        self._thread.start()

    def submit(self, floor: int) -> None:
        self._inbox.put(floor)

    def wait_idle(self) -> None:
        self._inbox.join()

    def stop(self, timeout: Optional[float] = None) -> None:
        if self._thread is None:
            return
        self._inbox.put(_SHUTDOWN)
        self._thread.join(timeout)
        self._thread = None

    def _run(self) -> None:
        logger.debug("Worker for car %s started", self.car.car_id)
        while True:
            floor = self._inbox.get()
            try:
                if floor is _SHUTDOWN:
                    break
                self.car.enqueue(floor)
            except Exception:
                logger.exception("Car %s failed serving floor %s", self.car.car_id, floor)
            finally:
                self._inbox.task_done()
        logger.debug("Worker for car %s stopped", self.car.car_id)


class ThreadedDispatcher(Dispatcher):
    """Dispatcher whose cars move concurrently, one worker thread per car.

    ``submit_request`` only pushes the floor onto the chosen car's inbox and
    returns; use ``wait_idle`` to block until every accepted call is served.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._workers: Dict[int, CarWorker] = {}
        self._started = False

    def add_car(self, car: Car) -> None:
        super().add_car(car)
        worker = CarWorker(car)
        self._workers[car.car_id] = worker
        if self._started:
            worker.start()

    def start(self) -> None:
        self._started = True
        for worker in self._workers.values():
            worker.start()

    def wait_idle(self) -> None:
        if not self._started and any(worker.backlog for worker in self._workers.values()):
            raise RuntimeError("Car workers are not running; call start() first")
        for worker in self._workers.values():
            worker.wait_idle()

    def stop(self, timeout: Optional[float] = None) -> None:
        for worker in self._workers.values():
            worker.stop(timeout)
        self._started = False

    def __enter__(self) -> "ThreadedDispatcher":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.wait_idle()
        self.stop()

    def _assign(self, car: Car, floor: int) -> None:
        self._workers[car.car_id].submit(floor)

    def _snapshot_car(self, car: Car) -> CarSnapshot:
        snapshot = car.snapshot()
        return replace(snapshot, backlog=snapshot.backlog + self._workers[car.car_id].backlog)
