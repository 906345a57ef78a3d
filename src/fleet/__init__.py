"""Elevator cars, their dispatcher and floor panels for LiftCall."""

from .errors import InvalidRequest
from .models import CallRequest, CarSnapshot, CarState, Direction, NotificationEvent
from .state import CarStateMachine
from .car import Car
from .dispatcher import Dispatcher
from .panel import EventLog, FloorPanel, NotificationSink
from .workers import CarWorker, ThreadedDispatcher
from .config import FleetConfig, build_dispatcher

__all__ = [
    "CallRequest",
    "Car",
    "CarSnapshot",
    "CarState",
    "CarStateMachine",
    "CarWorker",
    "Direction",
    "Dispatcher",
    "EventLog",
    "FleetConfig",
    "FloorPanel",
    "InvalidRequest",
    "NotificationEvent",
    "NotificationSink",
    "ThreadedDispatcher",
    "build_dispatcher",
]
