import pytest
from unittest.mock import Mock, call

from elevator_control.elevator import Car, Door, DoorState, Direction, Request

@pytest.fixture
def car():
    return Car(id=0, current_floor=2)

def assert_direction_invariant(car):
    assert (car.direction == Direction.NONE) == (not car.destinations)

class TestDoor:
    def test_initial_state(self):
        assert Door().state == DoorState.CLOSED

    def test_open_close(self):
        door = Door()
        door.open()
        assert door.state == DoorState.OPEN
        door.close()
        assert door.state == DoorState.CLOSED

class TestRequest:
    def test_request_is_frozen(self):
        request = Request(id=1, floor=3, direction=Direction.UP)
        with pytest.raises(AttributeError):
            request.floor = 4

class TestCar:
    def test_initial_state(self, car):
        assert car.current_floor == 2
        assert car.direction == Direction.NONE
        assert car.destinations == []
        assert car.door.state == DoorState.CLOSED
        assert car.in_service
        assert car.is_idle()

    def test_add_destination_keeps_sorted_unique(self, car):
        for floor in (7, 3, 9, 3, 7):
            car.add_destination(floor)
        assert car.destinations == [3, 7, 9]

    def test_add_destination_twice_is_noop(self, car):
        car.add_destination(5)
        once = list(car.destinations)
        car.add_destination(5)
        assert car.destinations == once

    def test_step_when_idle(self, car):
        car.direction = Direction.UP
        assert car.step() is None
        assert car.current_floor == 2
        assert car.direction == Direction.NONE
        assert car.is_idle()

    def test_reaches_destination_above(self, car):
        car.add_destination(5)
        floors = []
        for _ in range(3):
            car.step()
            floors.append(car.current_floor)
            assert car.direction == Direction.UP
        assert floors == [3, 4, 5]
        assert car.destinations == [5]

        # Doors cycle on the tick after arrival.
        car.step()
        assert car.current_floor == 5
        assert car.destinations == []
        assert car.direction == Direction.NONE
        assert car.door.state == DoorState.CLOSED

    def test_reaches_destination_below(self, car):
        car.add_destination(0)
        car.step()
        assert car.current_floor == 1
        assert car.direction == Direction.DOWN
        car.step()
        car.step()
        assert car.current_floor == 0
        assert car.is_idle()

    def test_arrival_opens_then_closes_door(self):
        car = Car(id=1, current_floor=4, destinations=[4])
        door = Mock(spec=Door)
        car.door = door
        car.step()
        assert door.mock_calls == [call.open(), call.close()]

    def test_direction_recomputed_after_arrival(self):
        car = Car(id=0, current_floor=3, direction=Direction.UP, destinations=[3, 6])
        assert car.step() == 3
        assert car.destinations == [6]
        assert car.direction == Direction.UP

        car = Car(id=0, current_floor=3, direction=Direction.DOWN, destinations=[1, 3])
        car.step()
        assert car.destinations == [1]
        assert car.direction == Direction.DOWN

    def test_moving_down_targets_highest_stop(self):
        car = Car(id=0, current_floor=5, direction=Direction.DOWN, destinations=[1, 4])
        car.step()
        assert car.current_floor == 4
        assert car.direction == Direction.DOWN

    def test_moves_one_floor_per_step_and_keeps_invariant(self, car):
        for stops in ([6, 9], [4, 0], [3]):
            for floor in stops:
                car.add_destination(floor)
            car.orient_towards(stops[0])
            assert_direction_invariant(car)
            for _ in range(15):
                before = car.current_floor
                car.step()
                assert abs(car.current_floor - before) <= 1
                assert_direction_invariant(car)
            assert car.is_idle()

    def test_moving_up_targets_lowest_stop(self):
        car = Car(id=0, current_floor=4, direction=Direction.UP, destinations=[2, 8])
        car.step()
        assert car.current_floor == 3
        assert car.direction == Direction.DOWN

    def test_orient_towards(self, car):
        car.orient_towards(6)
        assert car.direction == Direction.UP

        car = Car(id=1, current_floor=4)
        car.orient_towards(1)
        assert car.direction == Direction.DOWN

        car = Car(id=2, current_floor=4)
        car.orient_towards(4)
        assert car.direction == Direction.NONE

    def test_orient_towards_ignored_when_moving(self):
        car = Car(id=0, current_floor=4, direction=Direction.UP, destinations=[8])
        car.orient_towards(1)
        assert car.direction == Direction.UP

    def test_status_snapshot(self, car):
        car.add_destination(6)
        car.add_destination(4)
        status = car.status()
        assert status.id == 0
        assert status.current_floor == 2
        assert status.direction == "NONE"
        assert status.door_state == "CLOSED"
        assert status.pending_destinations == (4, 6)
        assert status.in_service is True

        car.add_destination(8)
        assert status.pending_destinations == (4, 6)
