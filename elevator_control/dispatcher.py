"""
Dispatches hall calls across a fixed fleet of cars and advances the simulation.
"""
import itertools
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Optional, Set, Tuple

from elevator_control.elevator import Car, CarStatus, Direction, Request
from elevator_control.exceptions import (
    InvalidArgumentException,
    InvalidDirectionException,
    InvalidFloorException,
    UnknownCarException,
)
from elevator_control.floor import Floor

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class SystemStatus:
    """Snapshot of the whole fleet after the last completed operation."""
    cars: Tuple[CarStatus, ...]
    queued_requests: int
    tick: int
    metrics: Dict[str, Any]

class Dispatcher:
    """Owns every car and floor and assigns requests to cars.

    Selection ignores the requested direction: the first idle in-service car
    wins, otherwise the in-service car with the fewest pending stops. Ties go
    to registration order. When no car is in service the request waits in a
    FIFO queue that is retried after every tick.
    """

    def __init__(self, num_cars: int, num_floors: int):
        if not _is_int(num_cars) or num_cars < 0:
            raise InvalidArgumentException(f"Number of cars must be a non-negative integer, got {num_cars!r}")
        if not _is_int(num_floors) or num_floors < 1:
            raise InvalidArgumentException(f"Number of floors must be a positive integer, got {num_floors!r}")

        self.num_floors = num_floors
        self.cars: List[Car] = [Car(id=i, current_floor=0) for i in range(num_cars)]
        self.floors: List[Floor] = [
            Floor(i, num_floors - 1, self.request_pickup) for i in range(num_floors)
        ]
        self.pending_requests: Deque[Request] = deque()
        self.tick = 0
        self._request_ids = itertools.count(1)

        self._metrics = {
            "total_calls": 0,
            "successful_assignments": 0,
            "queued_requests": 0,
            "destinations_selected": 0,
        }

        logger.info(f"Initialized with {num_cars} cars and {num_floors} floors")

    def request_pickup(self, floor: int, direction: Direction) -> Optional[int]:
        """Assign a hall call to a car. Returns the car id, or None when queued.

        When no car is in service but one already holds the floor as a stop,
        that car answers the call and nothing is queued.
        """
        self._validate_floor(floor)
        self._validate_direction(floor, direction)

        request = Request(id=next(self._request_ids), floor=floor, direction=direction)
        self._metrics["total_calls"] += 1
        logger.info(f"Received pickup request {request.id} at floor {floor} {direction.name}")

        car = self._find_best_car()
        if car is None:
            covering = self._car_stopping_at(floor)
            if covering is not None:
                logger.info(f"Request {request.id} covered by car {covering.id} stopping at floor {floor}")
                return covering.id
            self._enqueue(request)
            return None

        self._assign(car, request)
        return car.id

    def select_destination(self, car_id: int, floor: int) -> None:
        """In-car floor selection; bypasses dispatch selection."""
        self._validate_floor(floor)
        car = self.get_car(car_id)
        was_idle = car.is_idle()
        car.add_destination(floor)
        if was_idle:
            car.orient_towards(floor)
        self._metrics["destinations_selected"] += 1

    def set_in_service(self, car_id: int, in_service: bool) -> None:
        """Take a car out of, or return it to, the pickup pool."""
        car = self.get_car(car_id)
        car.in_service = bool(in_service)
        logger.info(f"Car {car.id} {'returned to' if car.in_service else 'removed from'} service")

    def step(self) -> None:
        """Advance every car one tick, then retry queued requests."""
        self.tick += 1
        served = set()
        for car in self.cars:
            floor = car.step()
            if floor is not None:
                served.add(floor)
        self._assign_queued_requests(served)

    def status(self) -> SystemStatus:
        return SystemStatus(
            cars=tuple(car.status() for car in self.cars),
            queued_requests=len(self.pending_requests),
            tick=self.tick,
            metrics=dict(self._metrics),
        )

    def floor(self, number: int) -> Floor:
        self._validate_floor(number)
        return self.floors[number]

    def get_car(self, car_id: int) -> Car:
        if not _is_int(car_id) or not 0 <= car_id < len(self.cars):
            raise UnknownCarException(car_id)
        return self.cars[car_id]

    def _find_best_car(self) -> Optional[Car]:
        available = [car for car in self.cars if car.in_service]
        for car in available:
            if car.is_idle():
                return car
        if not available:
            return None
        # min() keeps the first car on ties, i.e. registration order.
        return min(available, key=lambda car: len(car.destinations))

    def _assign(self, car: Car, request: Request) -> None:
        was_idle = car.is_idle()
        car.add_destination(request.floor)
        if was_idle:
            car.orient_towards(request.floor)
        self._metrics["successful_assignments"] += 1
        logger.info(f"Assigned request {request.id} (floor {request.floor}) to car {car.id}")

    def _enqueue(self, request: Request) -> None:
        for queued in self.pending_requests:
            if queued.floor == request.floor and queued.direction == request.direction:
                logger.info(f"Request at floor {request.floor} {request.direction.name} already queued")
                return
        self.pending_requests.append(request)
        self._metrics["queued_requests"] += 1
        logger.warning(f"No car in service. Queueing request {request.id}")

    def _car_stopping_at(self, floor: int) -> Optional[Car]:
        for car in self.cars:
            if floor in car.destinations:
                return car
        return None

    def _assign_queued_requests(self, served: Set[int]) -> None:
        remaining: Deque[Request] = deque()
        while self.pending_requests:
            request = self.pending_requests.popleft()
            if request.floor in served or self._car_stopping_at(request.floor) is not None:
                logger.info(f"Dropping queued request {request.id}, floor {request.floor} already served")
                continue
            car = self._find_best_car()
            if car is None:
                remaining.append(request)
                continue
            self._assign(car, request)
        self.pending_requests = remaining

    def _validate_floor(self, floor: int) -> None:
        if not _is_int(floor):
            raise InvalidFloorException("Floor must be an integer")
        top = self.num_floors - 1
        if not 0 <= floor <= top:
            raise InvalidFloorException(f"Floor {floor} invalid, must be 0-{top}")

    def _validate_direction(self, floor: int, direction: Direction) -> None:
        if direction not in (Direction.UP, Direction.DOWN):
            raise InvalidDirectionException("Pickup direction must be UP or DOWN")
        if direction == Direction.UP and floor == self.num_floors - 1:
            raise InvalidDirectionException(f"Cannot go UP from top floor {floor}")
        if direction == Direction.DOWN and floor == 0:
            raise InvalidDirectionException("Cannot go DOWN from floor 0")

def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
