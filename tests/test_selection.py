import pytest

from fleet import CarSnapshot, CarState, Direction
from selection import (
    LeastBusyStrategy,
    NearestCarStrategy,
    RoundRobinStrategy,
    get_strategy,
)


def car(car_id, floor, state=CarState.IDLE, backlog=0):
    return CarSnapshot(car_id=car_id, current_floor=floor, state=state, backlog=backlog)


def test_nearest_empty_fleet_returns_none():
    assert NearestCarStrategy().select_car(3, Direction.UP, []) is None


def test_nearest_prefers_closer_idle_car():
    fleet = [car(1, 1), car(2, 2)]
    assert NearestCarStrategy().select_car(3, Direction.DOWN, fleet).car_id == 2


def test_nearest_tie_keeps_earliest_car():
    fleet = [car(1, 1), car(2, 5), car(3, 5)]
    assert NearestCarStrategy().select_car(3, Direction.UP, fleet).car_id == 1


def test_nearest_takes_same_direction_car_that_has_not_passed():
    fleet = [car(1, 10), car(2, 2, CarState.MOVING_UP)]
    assert NearestCarStrategy().select_car(4, Direction.UP, fleet).car_id == 2


def test_nearest_skips_same_direction_car_that_has_passed():
    fleet = [car(1, 10), car(2, 5, CarState.MOVING_UP)]
    assert NearestCarStrategy().select_car(4, Direction.UP, fleet).car_id == 1


def test_nearest_skips_car_moving_the_other_way():
    fleet = [car(1, 9), car(2, 5, CarState.MOVING_DOWN), car(3, 8)]
    assert NearestCarStrategy().select_car(4, Direction.UP, fleet).car_id == 3


def test_nearest_down_call_takes_car_descending_from_above():
    fleet = [car(1, 1), car(2, 7, CarState.MOVING_DOWN)]
    assert NearestCarStrategy().select_car(6, Direction.DOWN, fleet).car_id == 2


def test_nearest_keeps_moving_seed_as_fallback():
    fleet = [car(1, 5, CarState.MOVING_DOWN), car(2, 9, CarState.MOVING_UP)]
    assert NearestCarStrategy().select_car(4, Direction.UP, fleet).car_id == 1


def test_nearest_is_deterministic():
    fleet = [car(1, 3), car(2, 6, CarState.MOVING_DOWN), car(3, 4)]
    strategy = NearestCarStrategy()
    picks = {strategy.select_car(5, Direction.DOWN, fleet).car_id for _ in range(5)}
    assert picks == {2}


def test_least_busy_prefers_short_backlog_then_distance():
    fleet = [car(1, 1, backlog=2), car(2, 9, backlog=0), car(3, 4, backlog=0)]
    assert LeastBusyStrategy().select_car(5, Direction.UP, fleet).car_id == 3


def test_round_robin_cycles_in_fleet_order():
    fleet = [car(1, 1), car(2, 1), car(3, 1)]
    strategy = RoundRobinStrategy(start=1)
    picks = [strategy.select_car(2, Direction.UP, fleet).car_id for _ in range(4)]
    assert picks == [2, 3, 1, 2]


def test_get_strategy_by_name():
    assert isinstance(get_strategy("NEAREST"), NearestCarStrategy)
    assert isinstance(get_strategy("round_robin", start=2), RoundRobinStrategy)


def test_get_strategy_unknown_name():
    with pytest.raises(ValueError, match="Unknown strategy"):
        get_strategy("zoned")
