# garage_sim/domain/errors.py


class GarageSimError(Exception):
    """Base class for every error raised by the navigation/performance core."""


class OutOfRange(GarageSimError, IndexError):
    def __init__(self, location_id, size: int):
        super().__init__(f"location id {location_id!r} outside [0, {size})")
        self.location_id, self.size = location_id, size


class NoPath(GarageSimError, LookupError):
    def __init__(self, start: int, goal: int):
        super().__init__(f"no path from {start} to {goal}")
        self.start, self.goal = start, goal


class InvalidParameter(GarageSimError, ValueError):
    pass


class UnknownDestination(GarageSimError, LookupError):
    pass


class UnknownVehicle(GarageSimError, LookupError):
    pass
