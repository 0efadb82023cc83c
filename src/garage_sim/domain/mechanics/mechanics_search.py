# garage_sim/domain/mechanics/mechanics_search.py
"""
Shortest paths over a LocationGraph.

Edge weight is the Euclidean distance between the two endpoints' coordinates.
Self-loop exits mean "no passage" and are never traversed. Both searches
break ties between equal keys by lowest location id.
"""

import heapq
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from garage_sim.domain.entities.geography import LocationGraph
from garage_sim.domain.errors import InvalidParameter, NoPath, OutOfRange

MAX_PATH_LENGTH = 100
HEURISTIC_WEIGHT = 1.0
NO_PREDECESSOR = -1


@dataclass(frozen=True)
class SearchResult:
    start: int
    goal: int
    path: tuple[int, ...] = ()  # start..goal inclusive; empty => no path
    cost: float = math.inf

    @classmethod
    def success(cls, start: int, goal: int, path: Sequence[int], cost: float) -> "SearchResult":
        return cls(start, goal, tuple(int(n) for n in path), float(cost))

    @classmethod
    def failure(cls, start: int, goal: int) -> "SearchResult":
        return cls(start, goal)

    @classmethod
    def from_trace(cls, start: int, goal: int, path: Sequence[int], cost: float) -> "SearchResult":
        """A traced path that was cut off before reaching back to start counts as no path."""
        if not path or int(path[0]) != start:
            return cls.failure(start, goal)
        return cls.success(start, goal, path, cost)

    @property
    def found(self) -> bool:
        return bool(self.path)

    def unwrap(self) -> tuple[int, ...]:
        if not self.found:
            raise NoPath(self.start, self.goal)
        return self.path


def reconstruct_path(came_from, goal: int, max_len: int = MAX_PATH_LENGTH) -> list[int]:
    """Walk predecessor pointers back from goal, then reverse. Stops after max_len nodes."""
    out: list[int] = []
    node = int(goal)
    while node != NO_PREDECESSOR and len(out) < max_len:
        out.append(node)
        node = int(came_from[node])
    out.reverse()
    return out


def path_cost(graph: LocationGraph, path: Sequence[int]) -> float:
    total = 0.0
    for a, b in zip(path, path[1:]):
        if graph.direction_to(a, b) is None:
            raise InvalidParameter(f"{a} -> {b} is not an exit")
        total += graph.distance(a, b)
    return total


# ---------------------------- Dijkstra ----------------------------


@dataclass(frozen=True)
class DijkstraTable:
    start: int
    goal: int | None  # None => ran until every reachable node was settled
    cost: np.ndarray  # inf => never reached
    predecessor: np.ndarray  # NO_PREDECESSOR => none
    visited: np.ndarray

    def _check(self, node) -> int:
        n = len(self.cost)
        if isinstance(node, bool) or not isinstance(node, (int, np.integer)) or not 0 <= node < n:
            raise OutOfRange(node, n)
        return int(node)

    def reached(self, node: int) -> bool:
        return bool(np.isfinite(self.cost[self._check(node)]))

    def path_to(self, node: int | None = None, max_len: int = MAX_PATH_LENGTH) -> SearchResult:
        node = self.goal if node is None else self._check(node)
        if node is None:
            raise ValueError("table has no goal; pass the node to reconstruct")
        if not self.reached(node):
            return SearchResult.failure(self.start, node)
        path = reconstruct_path(self.predecessor, node, max_len)
        return SearchResult.from_trace(self.start, node, path, self.cost[node])


def dijkstra(graph: LocationGraph, start: int, goal: int | None = None) -> DijkstraTable:
    """
    Single-source relaxation from start over the whole graph.
    Stops early once goal is the cheapest unvisited node (goal stays unvisited);
    costs of nodes visited before that point, and of goal itself, are optimal.
    Without a goal every reachable node is settled.
    """
    start = graph.check(start)
    if goal is not None:
        goal = graph.check(goal)
    n = len(graph)
    cost = np.full(n, np.inf)
    pred = np.full(n, NO_PREDECESSOR, dtype=int)
    visited = np.zeros(n, dtype=bool)

    cost[start] = 0.0
    heap = [(0.0, start)]
    while heap:
        c, u = heapq.heappop(heap)
        if visited[u] or c > cost[u]:
            continue  # stale entry
        if u == goal:
            break
        visited[u] = True
        for _, v in graph.exits(u):
            if visited[v]:
                continue
            new_cost = cost[u] + graph.distance(u, v)
            if new_cost < cost[v]:
                cost[v] = new_cost
                pred[v] = u
                heapq.heappush(heap, (float(new_cost), v))

    return DijkstraTable(start, goal, cost, pred, visited)


# ------------------------------ A* --------------------------------


def astar(
    graph: LocationGraph,
    start: int,
    goal: int,
    *,
    heuristic_weight: float = HEURISTIC_WEIGHT,
    max_path_length: int = MAX_PATH_LENGTH,
) -> SearchResult:
    start, goal = graph.check(start), graph.check(goal)
    if not (math.isfinite(heuristic_weight) and heuristic_weight > 0):
        raise InvalidParameter(f"heuristic_weight must be finite and > 0, got {heuristic_weight}")
    if max_path_length < 1:
        raise InvalidParameter("max_path_length must be >= 1")

    n = len(graph)
    gx, gy = graph.coordinates(goal)
    h = heuristic_weight * np.hypot(graph.xy[:, 0] - gx, graph.xy[:, 1] - gy)

    g = np.full(n, np.inf)
    f = np.full(n, np.inf)
    is_open = np.zeros(n, dtype=bool)
    closed = np.zeros(n, dtype=bool)
    came_from = np.full(n, NO_PREDECESSOR, dtype=int)

    g[start] = 0.0
    f[start] = h[start]
    is_open[start] = True
    heap = [(float(f[start]), start)]

    while heap:
        fu, u = heapq.heappop(heap)
        if not is_open[u] or fu != f[u]:
            continue  # stale entry
        if u == goal:
            path = reconstruct_path(came_from, goal, max_path_length)
            return SearchResult.from_trace(start, goal, path, g[goal])

        is_open[u] = False
        closed[u] = True
        for _, v in graph.exits(u):
            if closed[v]:
                continue
            tentative_g = g[u] + graph.distance(u, v)
            if not is_open[v]:
                is_open[v] = True
            elif tentative_g >= g[v]:
                continue
            came_from[v] = u
            g[v] = tentative_g
            f[v] = tentative_g + h[v]
            heapq.heappush(heap, (float(f[v]), v))

    return SearchResult.failure(start, goal)
