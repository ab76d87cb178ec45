"""
Console walkthrough: two cars, ten floors, a few calls and fifteen ticks.
"""
import logging

from elevator_control.config import Config
from elevator_control.dispatcher import Dispatcher, SystemStatus

logger = logging.getLogger(__name__)

def format_status(status: SystemStatus) -> str:
    lines = [f"===== Elevator System Status (tick {status.tick}) ====="]
    for car in status.cars:
        stops = list(car.pending_destinations)
        lines.append(
            f"Car {car.id} at floor {car.current_floor} going {car.direction}, "
            f"door {car.door_state}, next stops {stops}"
        )
    lines.append(f"Queued requests: {status.queued_requests}")
    return "\n".join(lines)

def run_demo(ticks: int) -> Dispatcher:
    system = Dispatcher(2, 10)

    system.floor(0).press_up()
    system.floor(5).press_down()
    system.select_destination(0, 8)

    for _ in range(ticks):
        system.step()
        logger.info("\n" + format_status(system.status()))
    return system

def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    run_demo(Config().demo_ticks)

if __name__ == "__main__":
    main()
