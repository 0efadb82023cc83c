# garage_sim/io/business_events.py

from dataclasses import dataclass
from typing import Literal

Algo = Literal["astar", "dijkstra"]


# Base type for analytics events
@dataclass
class BizEvent:
    run_id: str
    seq: int  # emission order within a run
    name: str  # stable event name


@dataclass
class RouteComputedBiz(BizEvent):
    algo: Algo
    start: int
    goal: int
    nodes: tuple[int, ...]
    length_m: float
    wall_ms: float | None = None


@dataclass
class RouteNotFoundBiz(BizEvent):
    algo: Algo
    start: int
    goal: int
    wall_ms: float | None = None


@dataclass
class PerformanceComputedBiz(BizEvent):
    vehicle: str
    terminal_velocity_mps: float
    acceleration_time_s: float
    braking_distance_m: float
    drag_force_n: float
    power_required_w: float
    lap_time_s: float
