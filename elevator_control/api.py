"""
REST API endpoints driving the elevator simulation.
"""
from dataclasses import asdict
from datetime import datetime
from threading import Lock
from typing import Optional
import logging

from flask import Flask, request
from flask_restx import Api, Resource, fields, Namespace
from prometheus_client import Counter

from elevator_control.dispatcher import Dispatcher
from elevator_control.elevator import Direction
from elevator_control.exceptions import ElevatorSystemException, InvalidDirectionException

logger = logging.getLogger(__name__)

MAX_TICKS_PER_CALL = 1000

api = Api(
    title="Elevator Control API",
    version="1.0",
    description="Drive a tick-based elevator control simulation",
    doc="/docs",
    prefix="/api",
)

elevator_ns = Namespace("elevator", description="Elevator operations")
health_ns = Namespace("health", description="Health check operations")
api.add_namespace(elevator_ns)
api.add_namespace(health_ns)

pickup_counter = Counter("elevator_pickup_requests_total", "Hall calls received", ["outcome"])
tick_counter = Counter("elevator_ticks_total", "Simulation ticks advanced")

# Request/Response models
pickup_model = api.model("PickupRequest", {
    "floor": fields.Integer(required=True, min=0, example=3),
    "direction": fields.String(required=True, enum=["UP", "DOWN"], example="UP")
})

pickup_response = api.model("PickupResponse", {
    "message": fields.String(example="Car 0 assigned"),
    "car_id": fields.Integer(example=0),
    "queued": fields.Boolean(example=False)
})

destination_model = api.model("DestinationRequest", {
    "floor": fields.Integer(required=True, min=0, example=8)
})

service_model = api.model("ServiceRequest", {
    "in_service": fields.Boolean(required=True, example=False)
})

step_model = api.model("StepRequest", {
    "ticks": fields.Integer(min=1, max=MAX_TICKS_PER_CALL, example=1)
})

car_status = api.model("CarStatus", {
    "id": fields.Integer,
    "current_floor": fields.Integer,
    "direction": fields.String,
    "door_state": fields.String,
    "pending_destinations": fields.List(fields.Integer),
    "in_service": fields.Boolean
})

system_status = api.model("SystemStatus", {
    "cars": fields.List(fields.Nested(car_status)),
    "queued_requests": fields.Integer,
    "tick": fields.Integer,
    "metrics": fields.Raw(),
})


dispatcher: Optional[Dispatcher] = None
_dispatch_lock = Lock()

def init_api(app: Flask, system: Dispatcher) -> None:
    """Initialize the API with its dispatcher."""
    global dispatcher
    dispatcher = system
    api.init_app(app)

def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ElevatorSystemException("Request body must be a JSON object", 400)
    return data

def _parse_direction(value) -> Direction:
    try:
        direction = Direction[str(value).upper()]
    except KeyError:
        raise InvalidDirectionException(f"Unknown direction {value!r}")
    return direction

def _status_payload() -> dict:
    return asdict(dispatcher.status())

@elevator_ns.route("/pickup")
class Pickup(Resource):
    @elevator_ns.expect(pickup_model)
    @elevator_ns.marshal_with(pickup_response)
    def post(self):
        """Press a hall call button."""
        data = _json_body()
        floor = data.get("floor")
        if floor is None or data.get("direction") is None:
            raise ElevatorSystemException("Both floor and direction are required", 400)
        direction = _parse_direction(data["direction"])

        with _dispatch_lock:
            car_id = dispatcher.request_pickup(floor, direction)

        if car_id is None:
            pickup_counter.labels("queued").inc()
            return {"message": "Request queued", "car_id": None, "queued": True}, 202
        pickup_counter.labels("assigned").inc()
        return {"message": f"Car {car_id} assigned", "car_id": car_id, "queued": False}, 200

@elevator_ns.route("/cars/<int:car_id>/destination")
class CarDestination(Resource):
    @elevator_ns.expect(destination_model)
    @elevator_ns.marshal_with(car_status)
    def post(self, car_id):
        """Select a floor from inside a car."""
        data = _json_body()
        if data.get("floor") is None:
            raise ElevatorSystemException("floor is required", 400)

        with _dispatch_lock:
            dispatcher.select_destination(car_id, data["floor"])
            return asdict(dispatcher.get_car(car_id).status())

@elevator_ns.route("/cars/<int:car_id>/service")
class CarService(Resource):
    @elevator_ns.expect(service_model)
    @elevator_ns.marshal_with(car_status)
    def put(self, car_id):
        """Take a car out of service or return it."""
        data = _json_body()
        in_service = data.get("in_service")
        if not isinstance(in_service, bool):
            raise ElevatorSystemException("in_service must be a boolean", 400)

        with _dispatch_lock:
            dispatcher.set_in_service(car_id, in_service)
            return asdict(dispatcher.get_car(car_id).status())

@elevator_ns.route("/step")
class Step(Resource):
    @elevator_ns.expect(step_model)
    @elevator_ns.marshal_with(system_status)
    def post(self):
        """Advance the simulation."""
        data = _json_body() if request.get_data() else {}
        ticks = data.get("ticks", 1)
        if isinstance(ticks, bool) or not isinstance(ticks, int) or not 1 <= ticks <= MAX_TICKS_PER_CALL:
            raise ElevatorSystemException(f"ticks must be an integer 1-{MAX_TICKS_PER_CALL}", 400)

        with _dispatch_lock:
            for _ in range(ticks):
                dispatcher.step()
            tick_counter.inc(ticks)
            return _status_payload()

@elevator_ns.route("/status")
class SystemStatus(Resource):
    @elevator_ns.marshal_with(system_status)
    def get(self):
        """Get current system status."""
        with _dispatch_lock:
            return _status_payload()

@health_ns.route("/health")
class HealthCheck(Resource):
    def get(self):
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat()
        }, 200

@health_ns.route("/metrics")
class Metrics(Resource):
    def get(self):
        """System metrics endpoint."""
        with _dispatch_lock:
            status = dispatcher.status()
        return {
            "metrics": status.metrics,
            "tick": status.tick,
            "timestamp": datetime.now().isoformat()
        }, 200

@api.errorhandler(ElevatorSystemException)
def handle_error(error):
    """Handle custom exceptions."""
    return {"error": error.message}, error.status_code

@api.errorhandler(Exception)
def handle_unexpected_error(error):
    """Handle unexpected errors."""
    logger.error(f"Unhandled error: {error}")
    return {"error": "Internal server error"}, 500
