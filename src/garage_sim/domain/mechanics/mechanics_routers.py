import time
from collections.abc import Sequence

from garage_sim.app.protocols import RoutePlanner
from garage_sim.domain.entities.geography import Leg, LocationGraph, Route
from garage_sim.domain.errors import NoPath
from garage_sim.domain.mechanics.mechanics_search import (
    HEURISTIC_WEIGHT,
    MAX_PATH_LENGTH,
    SearchResult,
    astar,
    dijkstra,
)
from garage_sim.io.hooks import NoopHooks, SearchHooks


def to_route(graph: LocationGraph, nodes: Sequence[int]) -> Route:
    legs, L = [], 0.0
    for u, v in zip(nodes, nodes[1:]):
        d = graph.direction_to(u, v)
        if d is None:
            raise ValueError(f"{u} -> {v} is not an exit")
        length = graph.distance(u, v)
        L += length
        legs.append(Leg(u, v, d, length))
    return Route(list(nodes), legs, L)


class _GraphRoutePlanner(RoutePlanner):
    algo = ""

    def __init__(self, graph: LocationGraph, *, hooks: SearchHooks | None = None):
        self.graph, self.hooks = graph, hooks or NoopHooks()

    def _search(self, start: int, goal: int) -> SearchResult:
        raise NotImplementedError

    def route(self, start, goal):
        self.hooks.search_start(algo=self.algo, start=start, goal=goal)
        t0 = time.perf_counter()
        result = self._search(start, goal)
        wall_ms = (time.perf_counter() - t0) * 1000.0
        if not result.found:
            self.hooks.no_path(algo=self.algo, start=start, goal=goal, wall_ms=wall_ms)
            raise NoPath(start, goal)
        r = to_route(self.graph, result.path)
        self.hooks.search_end(
            algo=self.algo,
            start=start,
            goal=goal,
            nodes=r.nodes,
            length_m=r.total_length_m,
            wall_ms=wall_ms,
        )
        return r

    def distance_m(self, start, goal):
        return self.route(start, goal).total_length_m


class AStarRoutePlanner(_GraphRoutePlanner):
    algo = "astar"

    def __init__(
        self,
        graph: LocationGraph,
        *,
        heuristic_weight: float = HEURISTIC_WEIGHT,
        max_path_length: int = MAX_PATH_LENGTH,
        hooks: SearchHooks | None = None,
    ):
        super().__init__(graph, hooks=hooks)
        self.w, self.max_len = heuristic_weight, max_path_length
        if heuristic_weight > 1.0:
            self.hooks.warning("inadmissible_heuristic", heuristic_weight=heuristic_weight)

    def _search(self, start, goal):
        return astar(
            self.graph, start, goal, heuristic_weight=self.w, max_path_length=self.max_len
        )


class DijkstraRoutePlanner(_GraphRoutePlanner):
    algo = "dijkstra"

    def __init__(
        self,
        graph: LocationGraph,
        *,
        max_path_length: int = MAX_PATH_LENGTH,
        hooks: SearchHooks | None = None,
    ):
        super().__init__(graph, hooks=hooks)
        self.max_len = max_path_length

    def _search(self, start, goal):
        return dijkstra(self.graph, start, goal).path_to(goal, self.max_len)
