import pytest

from fleet import Car, CarState, Direction, Dispatcher, EventLog, FloorPanel, InvalidRequest
from selection import RoundRobinStrategy


def test_call_from_floor_three_goes_to_nearer_car(two_car_dispatcher, sink):
    car_id = two_car_dispatcher.submit_request(3, Direction.DOWN)

    car1, car2 = two_car_dispatcher.cars
    assert car_id == 2
    assert car2.current_floor == 3
    assert car2.state is CarState.IDLE
    assert car1.current_floor == 1
    assert sink.updates == [(3, CarState.MOVING_UP), (3, CarState.IDLE)]


def test_follow_up_call_uses_idle_car_already_there(two_car_dispatcher, sink):
    two_car_dispatcher.submit_request(3, Direction.DOWN)
    sink.updates.clear()

    car_id = two_car_dispatcher.submit_request(1, Direction.UP)

    car1, car2 = two_car_dispatcher.cars
    assert car_id == 1
    assert car1.current_floor == 1
    assert car1.state is CarState.IDLE
    assert car2.current_floor == 3
    assert sink.updates == [(1, CarState.IDLE)]


def test_empty_fleet_drops_request(sink):
    dispatcher = Dispatcher()
    dispatcher.register_sink(sink)
    assert dispatcher.submit_request(4, Direction.UP) is None
    assert dispatcher.snapshot() == []
    assert sink.updates == []


def test_sinks_notified_in_registration_order(two_car_dispatcher):
    calls = []

    class Named:
        def __init__(self, name):
            self.name = name

        def on_update(self, floor, state):
            calls.append(self.name)

    two_car_dispatcher.register_sink(Named("a"))
    two_car_dispatcher.register_sink(Named("b"))
    two_car_dispatcher.broadcast(5, CarState.IDLE)
    assert calls == ["a", "b"]


def test_set_strategy_applies_to_next_request(two_car_dispatcher):
    two_car_dispatcher.set_strategy(RoundRobinStrategy())
    assert two_car_dispatcher.submit_request(2, "UP") == 1
    assert two_car_dispatcher.submit_request(2, "UP") == 2


def test_use_strategy_by_name(two_car_dispatcher):
    two_car_dispatcher.use_strategy("least_busy")
    assert type(two_car_dispatcher.strategy).__name__ == "LeastBusyStrategy"


@pytest.mark.parametrize("floor", [0, 11, "3", 2.5, True])
def test_invalid_floor_rejected(two_car_dispatcher, floor):
    with pytest.raises(InvalidRequest):
        two_car_dispatcher.submit_request(floor, Direction.UP)


@pytest.mark.parametrize("direction", ["sideways", 0, None])
def test_invalid_direction_rejected(two_car_dispatcher, direction):
    with pytest.raises(InvalidRequest):
        two_car_dispatcher.submit_request(3, direction)


def test_invalid_request_leaves_fleet_untouched(two_car_dispatcher, sink):
    before = two_car_dispatcher.snapshot()
    with pytest.raises(InvalidRequest):
        two_car_dispatcher.submit_request(42, Direction.DOWN)
    assert two_car_dispatcher.snapshot() == before
    assert sink.updates == []


def test_duplicate_car_id_rejected(two_car_dispatcher):
    with pytest.raises(ValueError):
        two_car_dispatcher.add_car(Car(1))


def test_floor_panel_places_calls_and_tracks_display(two_car_dispatcher):
    panel = FloorPanel(3, two_car_dispatcher)
    two_car_dispatcher.register_sink(panel)
    assert panel.display_floor == 1

    assert panel.request_elevator("down") == 2
    assert panel.display_floor == 3
    assert panel.display_state is CarState.IDLE


def test_direction_parse_accepts_ints_and_names():
    assert Direction.parse(1) is Direction.UP
    assert Direction.parse(-1) is Direction.DOWN
    assert Direction.parse(" up ") is Direction.UP


def test_call_placed_from_a_sink_mid_walk_is_served_after_the_walk():
    dispatcher = Dispatcher(lowest_floor=1, highest_floor=10)
    dispatcher.add_car(Car(1, current_floor=1))
    assigned = []
    idle_floors = []

    class CallingPanel:
        def on_update(self, floor, state):
            if (floor, state) == (2, CarState.MOVING_UP) and not assigned:
                assigned.append(dispatcher.submit_request(5, Direction.UP))
            if state is CarState.IDLE:
                idle_floors.append(floor)

    dispatcher.register_sink(CallingPanel())
    assert dispatcher.submit_request(3, Direction.UP) == 1

    car = dispatcher.cars[0]
    assert assigned == [1]
    assert idle_floors == [3, 5]
    assert car.current_floor == 5
    assert car.state is CarState.IDLE
    assert not car.queue


def test_event_log_counts_and_drains(two_car_dispatcher):
    log = EventLog()
    two_car_dispatcher.register_sink(log)
    two_car_dispatcher.submit_request(4, Direction.DOWN)

    assert len(log) == 3
    assert [event.floor for event in log.drain()] == [3, 4, 4]
    assert len(log) == 0
