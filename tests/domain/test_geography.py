import numpy as np
import pytest

from garage_sim.domain.entities.geography import (
    DIRECTIONS,
    Direction,
    Location,
    LocationGraph,
    Point,
)
from garage_sim.domain.errors import OutOfRange
from garage_sim.runtime.resources import GARAGE_LAYOUT


@pytest.fixture
def garage() -> LocationGraph:
    return LocationGraph.from_table(GARAGE_LAYOUT)


def test_every_location_has_four_neighbor_entries(garage: LocationGraph):
    assert len(garage) == 10
    for loc in garage:
        nbrs = garage.neighbors(loc.id)
        assert [d for d, _ in nbrs] == list(DIRECTIONS)


def test_self_loop_is_not_an_exit(garage: LocationGraph):
    office = garage.find("office")
    assert office.id == 6
    assert not office.has_exit(Direction.NORTH)
    assert office.has_exit(Direction.WEST)
    assert garage.exits(6) == ((Direction.WEST, 0),)
    # the sentinel still shows up as a raw neighbor
    assert (Direction.NORTH, 6) in garage.neighbors(6)


def test_coordinates_and_distance(garage: LocationGraph):
    assert garage.coordinates(7) == (-10.0, 10.0)
    assert abs(garage.distance(0, 9) - np.hypot(20.0, 20.0)) < 1e-12
    assert garage.direction_to(1, 3) is Direction.EAST
    assert garage.direction_to(3, 0) is None


def test_out_of_range_ids_raise(garage: LocationGraph):
    for bad in (-1, 10, 99):
        with pytest.raises(OutOfRange):
            garage.coordinates(bad)
    with pytest.raises(OutOfRange):
        garage.neighbors(10)
    # OutOfRange is still an IndexError for generic callers
    with pytest.raises(IndexError):
        garage.location(42)


def test_find_is_case_insensitive_substring_first_id_wins(garage: LocationGraph):
    assert garage.find("SHOW").name == "Showroom"
    assert garage.find("garage").id == 0  # "Garage Entrance" before "Main Garage Bay"
    assert garage.find("helipad") is None
    assert garage.find("   ") is None


def test_coordinate_array_is_read_only(garage: LocationGraph):
    with pytest.raises(ValueError):
        garage.xy[0, 0] = 5.0


def test_from_table_defaults_missing_exits_to_self_loop():
    g = LocationGraph.from_table(
        [
            {"id": 0, "name": "A", "x": 0, "y": 0, "exits": {"e": "B"}},
            {"id": 1, "name": "B", "x": 10, "y": 0, "exits": {"west": 0}},
        ]
    )
    assert g.location(0).exits == (0, 0, 1, 0)
    assert g.location(1).exits == (1, 1, 1, 0)


def test_constructor_rejects_bad_tables():
    with pytest.raises(ValueError):
        LocationGraph([])
    with pytest.raises(ValueError):  # ids not dense
        LocationGraph([Location(1, "A", Point(0, 0), (1, 1, 1, 1))])
    with pytest.raises(ValueError):  # exit to unknown id
        LocationGraph([Location(0, "A", Point(0, 0), (0, 0, 3, 0))])
    with pytest.raises(ValueError):
        LocationGraph.from_table([{"id": 0, "name": "A", "x": 0, "y": 0, "exits": {"n": "Z"}}])
    with pytest.raises(ValueError):  # more than MAX_LOCATIONS
        LocationGraph(Location(i, f"L{i}", Point(i, 0), (i, i, i, i)) for i in range(21))


def test_direction_parse():
    assert Direction.parse("N") is Direction.NORTH
    assert Direction.parse(" west ") is Direction.WEST
    with pytest.raises(ValueError):
        Direction.parse("up")


def test_from_table_rejects_duplicate_names():
    rows = [
        {"id": 0, "name": "Bay", "x": 0, "y": 0, "exits": {"e": "Pit"}},
        {"id": 1, "name": "Pit", "x": 10, "y": 0},
        {"id": 2, "name": "pit", "x": 20, "y": 0},
    ]
    with pytest.raises(ValueError, match="Pit|pit"):
        LocationGraph.from_table(rows)
