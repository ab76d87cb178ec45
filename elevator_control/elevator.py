"""
Core elevator car logic with door handling and single-tick movement.
"""
import bisect
from enum import Enum, auto
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

class Direction(Enum):
    UP = auto()
    DOWN = auto()
    NONE = auto()

class DoorState(Enum):
    OPEN = auto()
    CLOSED = auto()
    MOVING = auto()

@dataclass(frozen=True)
class Request:
    """A hall pickup request waiting for a car."""
    id: int
    floor: int
    direction: Direction

class Door:
    """Door of a single car. Only the owning car changes its state."""

    def __init__(self):
        self.state = DoorState.CLOSED

    def open(self) -> None:
        self.state = DoorState.OPEN

    def close(self) -> None:
        self.state = DoorState.CLOSED

@dataclass(frozen=True)
class CarStatus:
    id: int
    current_floor: int
    direction: str
    door_state: str
    pending_destinations: Tuple[int, ...]
    in_service: bool

@dataclass
class Car:
    """Represents a single elevator car stepping one floor per tick."""

    id: int
    current_floor: int = 0
    direction: Direction = Direction.NONE
    destinations: List[int] = field(default_factory=list)
    door: Door = field(default_factory=Door)
    in_service: bool = True

    def add_destination(self, floor: int) -> None:
        """Add a stop; adding a floor already pending is a no-op."""
        index = bisect.bisect_left(self.destinations, floor)
        if index < len(self.destinations) and self.destinations[index] == floor:
            return
        self.destinations.insert(index, floor)
        logger.info(f"Car {self.id}: added destination {floor}")

    def orient_towards(self, floor: int) -> None:
        """Point an idle car at its first stop."""
        if self.direction != Direction.NONE:
            return
        if floor > self.current_floor:
            self.direction = Direction.UP
        elif floor < self.current_floor:
            self.direction = Direction.DOWN

    def step(self) -> Optional[int]:
        """Advance one tick towards the next pending destination.

        Returns the floor served on this tick, if any.
        """
        if not self.destinations:
            self.direction = Direction.NONE
            return None

        next_floor = self._next_stop()

        if self.current_floor == next_floor:
            logger.info(f"Car {self.id} arrived at floor {self.current_floor}")
            self.door.open()
            self.destinations.remove(next_floor)
            # Dwell is not timed; doors close within the same tick.
            self.door.close()
            self.direction = self._direction_for_next()
            return next_floor
        elif self.current_floor < next_floor:
            self.current_floor += 1
            self.direction = Direction.UP
            logger.debug(f"Car {self.id} moving UP to floor {self.current_floor}")
        else:
            self.current_floor -= 1
            self.direction = Direction.DOWN
            logger.debug(f"Car {self.id} moving DOWN to floor {self.current_floor}")
        return None

    def _next_stop(self) -> int:
        if self.direction == Direction.DOWN:
            return self.destinations[-1]
        return self.destinations[0]

    def _direction_for_next(self) -> Direction:
        if not self.destinations:
            return Direction.NONE
        next_floor = self._next_stop()
        if next_floor > self.current_floor:
            return Direction.UP
        if next_floor < self.current_floor:
            return Direction.DOWN
        return Direction.NONE

    def is_idle(self) -> bool:
        return not self.destinations and self.direction == Direction.NONE

    def status(self) -> CarStatus:
        return CarStatus(
            id=self.id,
            current_floor=self.current_floor,
            direction=self.direction.name,
            door_state=self.door.state.name,
            pending_destinations=tuple(self.destinations),
            in_service=self.in_service,
        )
