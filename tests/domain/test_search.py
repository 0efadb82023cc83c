import math

import numpy as np
import pytest

from garage_sim.domain.entities.geography import LocationGraph
from garage_sim.domain.errors import InvalidParameter, NoPath, OutOfRange
from garage_sim.domain.mechanics.mechanics_search import (
    NO_PREDECESSOR,
    SearchResult,
    astar,
    dijkstra,
    path_cost,
    reconstruct_path,
)
from garage_sim.runtime.resources import GARAGE_LAYOUT

# ---------- Fixtures


@pytest.fixture
def garage() -> LocationGraph:
    return LocationGraph.from_table(GARAGE_LAYOUT)


@pytest.fixture
def pair() -> LocationGraph:
    return LocationGraph.from_table(
        [
            {"id": 0, "name": "a", "x": 0.0, "y": 0.0, "exits": {"east": "b"}},
            {"id": 1, "name": "b", "x": 10.0, "y": 0.0, "exits": {"west": "a"}},
        ]
    )


@pytest.fixture
def dead_end() -> LocationGraph:
    # 0 <-> 1; 2 has only self-loops; 3 leads out to 1 but nothing leads in
    return LocationGraph.from_table(
        [
            {"id": 0, "name": "a", "x": 0, "y": 0, "exits": {"e": "b"}},
            {"id": 1, "name": "b", "x": 10, "y": 0, "exits": {"w": "a"}},
            {"id": 2, "name": "island", "x": 5, "y": 5},
            {"id": 3, "name": "sink", "x": 20, "y": 0, "exits": {"w": "b"}},
        ]
    )


# ---------- A*


def test_astar_start_equals_goal_is_single_node(garage: LocationGraph):
    for n in range(len(garage)):
        r = astar(garage, n, n)
        assert r.found and r.path == (n,) and r.cost == 0.0


def test_two_node_graph_cost_is_exactly_ten(pair: LocationGraph):
    r = astar(pair, 0, 1)
    assert r.path == (0, 1)
    assert r.cost == 10.0
    t = dijkstra(pair, 0, 1)
    assert t.cost[1] == 10.0
    assert t.path_to().path == (0, 1)


def test_astar_garage_route_with_lowest_id_tie_break(garage: LocationGraph):
    # entrance -> showroom: two routes of 40 m; the one through the workshop
    # reaches the goal first because equal f-scores are popped by lowest id
    r = astar(garage, 0, 9)
    assert r.path == (0, 1, 2, 4, 9)
    assert abs(r.cost - 40.0) < 1e-9


def test_unreachable_goal_is_no_path(dead_end: LocationGraph):
    r = astar(dead_end, 0, 2)
    assert not r.found and r.path == () and math.isinf(r.cost)
    with pytest.raises(NoPath) as ei:
        r.unwrap()
    assert (ei.value.start, ei.value.goal) == (0, 2)

    t = dijkstra(dead_end, 0, 2)
    assert not t.reached(2)
    assert not t.path_to().found

    # one-way: nothing leads into 3
    assert not astar(dead_end, 0, 3).found
    assert astar(dead_end, 3, 0).path == (3, 1, 0)


def test_out_of_range_start_or_goal(garage: LocationGraph):
    with pytest.raises(OutOfRange):
        astar(garage, 0, 20)
    with pytest.raises(OutOfRange):
        dijkstra(garage, -1, 3)


def test_heuristic_weight_must_be_positive(garage: LocationGraph):
    with pytest.raises(InvalidParameter):
        astar(garage, 0, 9, heuristic_weight=0.0)
    with pytest.raises(InvalidParameter):
        astar(garage, 0, 9, heuristic_weight=float("nan"))


# ---------- Dijkstra


def test_dijkstra_stops_at_goal_without_visiting_it(garage: LocationGraph):
    t = dijkstra(garage, 0, 9)
    assert not t.visited[9]
    assert t.visited[0] and t.visited[4]
    assert t.predecessor[9] == 4
    assert t.predecessor[0] == NO_PREDECESSOR
    assert abs(t.cost[9] - 40.0) < 1e-9


def test_dijkstra_without_goal_settles_every_reachable_node(garage: LocationGraph):
    t = dijkstra(garage, 0)
    assert t.visited.all()
    assert np.isfinite(t.cost).all()
    assert abs(t.cost[5] - 40.0) < 1e-9  # testing track via paint booth
    assert abs(t.cost[7] - 20.0) < 1e-9
    with pytest.raises(ValueError):
        t.path_to()


def test_dijkstra_uses_euclidean_weights_not_hops():
    g = LocationGraph.from_table(
        [
            {"id": 0, "name": "a", "x": 0, "y": 0, "exits": {"e": "c", "n": "b"}},
            {"id": 1, "name": "b", "x": 1, "y": 1, "exits": {"e": "c"}},
            {"id": 2, "name": "c", "x": 2, "y": 0},
        ]
    )
    # a -> c = 2.0 ; a -> b -> c = 2 * sqrt(2) ~ 2.83: direct wins
    assert dijkstra(g, 0, 2).path_to().path == (0, 2)
    g2 = LocationGraph.from_table(
        [
            {"id": 0, "name": "a", "x": 0, "y": 0, "exits": {"n": "x", "e": "y"}},
            {"id": 1, "name": "x", "x": 0, "y": 100, "exits": {"e": "goal"}},
            {"id": 2, "name": "y", "x": 3, "y": 1, "exits": {"e": "z"}},
            {"id": 3, "name": "z", "x": 7, "y": 1, "exits": {"e": "goal"}},
            {"id": 4, "name": "goal", "x": 10, "y": 0},
        ]
    )
    # two hops via x (~200 m) lose to three hops via y and z (~10 m)
    assert dijkstra(g2, 0, 4).path_to().path == (0, 2, 3, 4)
    assert astar(g2, 0, 4).path == (0, 2, 3, 4)


# ---------- Cross-checks


def test_astar_and_dijkstra_agree_on_every_reachable_pair(garage: LocationGraph):
    for a in range(len(garage)):
        full = dijkstra(garage, a)
        for b in range(len(garage)):
            r = astar(garage, a, b)
            assert r.found == full.reached(b)
            if r.found:
                assert r.cost == pytest.approx(float(full.cost[b]), abs=1e-9)
                assert r.cost == pytest.approx(float(dijkstra(garage, a, b).cost[b]), abs=1e-9)


def test_reconstructed_paths_only_use_real_edges(garage: LocationGraph):
    for a in range(len(garage)):
        for b in range(len(garage)):
            r = astar(garage, a, b)
            assert r.path[0] == a and r.path[-1] == b
            for u, v in zip(r.path, r.path[1:]):
                assert u != v
                assert garage.direction_to(u, v) is not None
            assert path_cost(garage, r.path) == pytest.approx(r.cost)


def test_path_cost_rejects_non_edges(garage: LocationGraph):
    assert path_cost(garage, [3]) == 0.0
    with pytest.raises(InvalidParameter):
        path_cost(garage, [0, 9])


def test_reconstruct_path_cutoff():
    # 0 <- 1 <- 2 <- 3
    came_from = [NO_PREDECESSOR, 0, 1, 2]
    assert reconstruct_path(came_from, 3) == [0, 1, 2, 3]
    assert reconstruct_path(came_from, 3, max_len=2) == [2, 3]


def test_search_result_helpers():
    ok = SearchResult.success(0, 2, [0, 1, 2], 5.0)
    assert ok.found and ok.unwrap() == (0, 1, 2)
    assert not SearchResult.failure(0, 2).found


def test_searches_do_not_mutate_the_graph(garage: LocationGraph):
    before = [(loc, garage.coordinates(loc.id)) for loc in garage]
    astar(garage, 0, 5)
    dijkstra(garage, 0)
    assert [(loc, garage.coordinates(loc.id)) for loc in garage] == before


# ---------- Path-length cutoff and table bounds


def test_cut_off_path_is_reported_as_no_path(garage: LocationGraph):
    # 0 -> 9 needs five nodes; a two-node cutoff would only keep (4, 9)
    r = astar(garage, 0, 9, max_path_length=2)
    assert not r.found and r.path == ()
    with pytest.raises(NoPath):
        r.unwrap()
    t = dijkstra(garage, 0, 9)
    assert not t.path_to(max_len=2).found
    assert t.path_to(max_len=5).path == (0, 1, 2, 4, 9)
    # a path that fits exactly is still returned
    assert astar(garage, 0, 9, max_path_length=5).path == (0, 1, 2, 4, 9)
    assert astar(garage, 3, 3, max_path_length=1).path == (3,)


def test_from_trace_requires_path_back_to_start():
    assert SearchResult.from_trace(0, 3, [0, 1, 3], 2.0).found
    assert not SearchResult.from_trace(0, 3, [1, 3], 2.0).found
    assert not SearchResult.from_trace(0, 3, [], 2.0).found


@pytest.mark.parametrize("node", [-1, 10, True, 2.0])
def test_dijkstra_table_lookups_are_bounds_checked(garage: LocationGraph, node):
    t = dijkstra(garage, 0)
    with pytest.raises(OutOfRange):
        t.path_to(node)
    with pytest.raises(OutOfRange):
        t.reached(node)
    assert t.path_to(np.int64(9)).path[-1] == 9
