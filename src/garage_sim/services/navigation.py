# garage_sim/services/navigation.py
from garage_sim.app.protocols import RoutePlanner
from garage_sim.domain.entities.geography import Route
from garage_sim.domain.errors import UnknownDestination

__all__ = ["NavigationService", "UnknownDestination"]


class NavigationService:
    """Resolve destinations by name and describe planner routes turn by turn."""

    def __init__(self, planner: RoutePlanner):
        self.planner = planner
        self.graph = planner.graph

    def resolve(self, destination: str | int) -> int:
        if isinstance(destination, int):
            return self.graph.check(destination)
        loc = self.graph.find(destination)
        if loc is None:
            raise UnknownDestination(destination)
        return loc.id

    def navigate(self, from_id: int, destination: str | int) -> Route:
        return self.planner.route(self.graph.check(from_id), self.resolve(destination))

    def describe(self, route: Route) -> list[str]:
        lines = []
        for i, node in enumerate(route.nodes):
            name = self.graph.location(node).name
            if i < len(route.legs):
                lines.append(f"{i + 1}. {name} -> {route.legs[i].direction.value}")
            else:
                lines.append(f"{i + 1}. {name}")
        return lines
