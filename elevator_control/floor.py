"""
Floors and their hall call buttons.
"""
from typing import Callable, Optional
import logging

from elevator_control.elevator import Direction
from elevator_control.exceptions import InvalidDirectionException

logger = logging.getLogger(__name__)

PickupHandler = Callable[[int, Direction], Optional[int]]

class HallButton:
    """Up or down call button on one floor."""

    def __init__(self, floor_number: int, direction: Direction, on_press: PickupHandler):
        self.floor_number = floor_number
        self.direction = direction
        self._on_press = on_press

    def press(self) -> Optional[int]:
        logger.info(f"Button pressed: floor {self.floor_number} {self.direction.name}")
        return self._on_press(self.floor_number, self.direction)

class Floor:
    """A landing; the bottom floor has no down button and the top floor no up button."""

    def __init__(self, number: int, top_floor: int, on_press: PickupHandler):
        self.number = number
        self.up_button = HallButton(number, Direction.UP, on_press) if number < top_floor else None
        self.down_button = HallButton(number, Direction.DOWN, on_press) if number > 0 else None

    def press_up(self) -> Optional[int]:
        if self.up_button is None:
            raise InvalidDirectionException(f"Floor {self.number} has no UP button")
        return self.up_button.press()

    def press_down(self) -> Optional[int]:
        if self.down_button is None:
            raise InvalidDirectionException(f"Floor {self.number} has no DOWN button")
        return self.down_button.press()
