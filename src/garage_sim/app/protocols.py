from typing import Protocol, runtime_checkable

from garage_sim.domain.entities.geography import LocationGraph, Route


# ------------- Mechanics --------------------
@runtime_checkable
class RoutePlanner(Protocol):
    """
    Responsibilities:
      • Compute a route between two locations of a fixed graph.
      • Compute the route length between two locations.
    Raises NoPath when goal cannot be reached, OutOfRange for unknown ids.
    Units: meters for coordinates/distances.
    """

    graph: LocationGraph

    def route(self, start: int, goal: int) -> Route: ...
    def distance_m(self, start: int, goal: int) -> float: ...
