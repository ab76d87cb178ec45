"""
Custom exceptions for the elevator control system.
"""

class ElevatorSystemException(Exception):
    """Base exception for all elevator control errors."""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class InvalidArgumentException(ElevatorSystemException):
    """Invalid construction argument provided."""
    def __init__(self, message: str):
        super().__init__(message, 400)

class InvalidFloorException(ElevatorSystemException):
    """Invalid floor number provided."""
    def __init__(self, message: str):
        super().__init__(message, 400)

class InvalidDirectionException(ElevatorSystemException):
    """Pickup direction not available at the requested floor."""
    def __init__(self, message: str):
        super().__init__(message, 400)

class UnknownCarException(ElevatorSystemException):
    """Car id not present in the fleet."""
    def __init__(self, car_id):
        super().__init__(f"Unknown car {car_id}", 404)
