from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

import numpy as np

from garage_sim.domain.errors import OutOfRange

MAX_LOCATIONS = 20


# Core geometry types used by mechanics
@dataclass(frozen=True)
class Point:
    x: float  # meters in the garage floor plan
    y: float


class Direction(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @classmethod
    def parse(cls, s: "str | Direction") -> "Direction":
        if isinstance(s, Direction):
            return s
        key = s.strip().lower()
        for d in cls:
            if key in (d.value, d.value[0]):
                return d
        raise ValueError(f"Unknown direction {s!r}")


DIRECTIONS: tuple[Direction, ...] = tuple(Direction)


@dataclass(frozen=True)
class Location:
    id: int
    name: str
    point: Point
    exits: tuple[int, int, int, int]  # indexed like DIRECTIONS; own id => no passage
    has_vehicle_access: bool = False
    has_computer: bool = False

    def target(self, direction: Direction) -> int:
        return self.exits[DIRECTIONS.index(direction)]

    def has_exit(self, direction: Direction) -> bool:
        return self.target(direction) != self.id


@dataclass(frozen=True)
class Leg:
    from_id: int
    to_id: int
    direction: Direction
    length_m: float


@dataclass
class Route:
    nodes: list[int]
    legs: list[Leg]
    total_length_m: float

    @property
    def steps(self) -> int:
        return len(self.legs)


class LocationGraph:
    """
    Fixed, array-backed navigation graph.
    Ids are dense 0..n-1; every location carries one exit per Direction.
    Built once, never mutated.
    """

    def __init__(self, locations: Iterable[Location]):
        locs = tuple(sorted(locations, key=lambda loc: loc.id))
        n = len(locs)
        if n == 0:
            raise ValueError("graph needs at least one location")
        if n > MAX_LOCATIONS:
            raise ValueError(f"graph holds at most {MAX_LOCATIONS} locations, got {n}")
        for i, loc in enumerate(locs):
            if loc.id != i:
                raise ValueError(f"location ids must be dense 0..{n - 1}, got {loc.id} at {i}")
            if len(loc.exits) != len(DIRECTIONS):
                raise ValueError(f"location {loc.id} must define {len(DIRECTIONS)} exits")
            for t in loc.exits:
                if not 0 <= t < n:
                    raise ValueError(f"location {loc.id} has exit to unknown id {t}")
        self._locs = locs
        xy = np.array([(loc.point.x, loc.point.y) for loc in locs], dtype=float)
        xy.setflags(write=False)
        self._xy = xy

    @classmethod
    def from_table(cls, rows: Iterable[Mapping]) -> "LocationGraph":
        """
        rows: {"id", "name", "x", "y", "exits": {direction: name|id}, flags...}
        Directions left out of "exits" point back at the row (no passage).
        """
        rows = list(rows)
        by_name: dict[str, int] = {}
        for r in rows:
            key = str(r["name"]).lower()
            if key in by_name:
                raise ValueError(
                    f"location name {r['name']!r} used by ids {by_name[key]} and {r['id']}"
                )
            by_name[key] = int(r["id"])

        def _resolve(ref) -> int:
            if isinstance(ref, int):
                return ref
            try:
                return by_name[str(ref).lower()]
            except KeyError:
                raise ValueError(f"exit refers to unknown location {ref!r}") from None

        locs = []
        for r in rows:
            rid = int(r["id"])
            given = {Direction.parse(k): _resolve(v) for k, v in (r.get("exits") or {}).items()}
            locs.append(
                Location(
                    id=rid,
                    name=str(r["name"]),
                    point=Point(float(r["x"]), float(r["y"])),
                    exits=tuple(given.get(d, rid) for d in DIRECTIONS),
                    has_vehicle_access=bool(r.get("has_vehicle_access", False)),
                    has_computer=bool(r.get("has_computer", False)),
                )
            )
        return cls(locs)

    # ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._locs)

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locs)

    def check(self, location_id: int) -> int:
        if not isinstance(location_id, (int, np.integer)) or isinstance(location_id, bool):
            raise OutOfRange(location_id, len(self._locs))
        if not 0 <= location_id < len(self._locs):
            raise OutOfRange(location_id, len(self._locs))
        return int(location_id)

    def location(self, location_id: int) -> Location:
        return self._locs[self.check(location_id)]

    def neighbors(self, location_id: int) -> tuple[tuple[Direction, int], ...]:
        loc = self.location(location_id)
        return tuple(zip(DIRECTIONS, loc.exits))

    def exits(self, location_id: int) -> tuple[tuple[Direction, int], ...]:
        loc = self.location(location_id)
        return tuple((d, loc.target(d)) for d in DIRECTIONS if loc.has_exit(d))

    def coordinates(self, location_id: int) -> tuple[float, float]:
        x, y = self._xy[self.check(location_id)]
        return float(x), float(y)

    @property
    def xy(self) -> np.ndarray:
        """Read-only (n, 2) coordinate array, row i = location i."""
        return self._xy

    def distance(self, a: int, b: int) -> float:
        ax, ay = self.coordinates(a)
        bx, by = self.coordinates(b)
        return float(np.hypot(bx - ax, by - ay))

    def direction_to(self, a: int, b: int) -> Direction | None:
        for d, t in self.exits(a):
            if t == b:
                return d
        return None

    def find(self, fragment: str) -> Location | None:
        key = fragment.strip().lower()
        if not key:
            return None
        for loc in self._locs:
            if key in loc.name.lower():
                return loc
        return None
