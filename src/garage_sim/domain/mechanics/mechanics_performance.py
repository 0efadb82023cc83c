# garage_sim/domain/mechanics/mechanics_performance.py
"""
Vehicle performance formulas.

Deliberately simplified (gameplay feel over rigor); keep the formulas as they are.
Every function is pure and never writes to the Vehicle it is given.
"""

import math
from dataclasses import dataclass
from numbers import Integral

import numpy as np

from garage_sim.domain.entities.vehicle import Vehicle
from garage_sim.domain.errors import InvalidParameter

AIR_DENSITY = 1.225  # kg/m^3 at sea level
GRAVITY = 9.81  # m/s^2
HP_TO_WATTS = 745.7
BRAKING_G = 0.8

TURN_ZONE_M = 50.0
TURN_SPEED_FACTOR = 0.6
STRAIGHT_SPEED_FACTOR = 0.9
TURN_PENALTY_S = 1.5

MPS_TO_MPH = 2.237
M_TO_FT = 3.281


# ---------------- validation ----------------


def _positive(name: str, value: float) -> float:
    if not (math.isfinite(value) and value > 0):
        raise InvalidParameter(f"{name} must be finite and > 0, got {value}")
    return value


def _non_negative(name: str, value: float) -> float:
    if not (math.isfinite(value) and value >= 0):
        raise InvalidParameter(f"{name} must be finite and >= 0, got {value}")
    return value


def _drag_factor(v: Vehicle) -> float:
    # 0.5 * rho * Cd * A
    return (
        0.5
        * AIR_DENSITY
        * _positive("drag_coefficient", v.drag_coefficient)
        * _positive("frontal_area_m2", v.frontal_area_m2)
    )


# ---------------- formulas ----------------


def terminal_velocity(v: Vehicle) -> float:
    """
    Speed at which drag power equals engine power:
        v = cbrt(P_watts / (0.5 * rho * Cd * A))
    """
    power_w = _positive("engine_power_hp", v.engine_power_hp) * HP_TO_WATTS
    return float(np.cbrt(power_w / _drag_factor(v)))


def acceleration_time(v: Vehicle, target_speed: float) -> float:
    """t = target / (accel * (hp / 100) / (mass / 1000)); a scaling, not a kinematic integral."""
    _non_negative("target_speed", target_speed)
    effective = (
        _positive("acceleration_mps2", v.acceleration_mps2)
        * (_positive("engine_power_hp", v.engine_power_hp) / 100.0)
        / (_positive("mass_kg", v.mass_kg) / 1000.0)
    )
    return target_speed / effective


def braking_distance(v: Vehicle, initial_speed: float) -> float:
    """d = s^2 / (2 * 0.8 g)"""
    _non_negative("initial_speed", initial_speed)
    return initial_speed * initial_speed / (2.0 * BRAKING_G * GRAVITY)


def drag_force(v: Vehicle, velocity: float) -> float:
    _non_negative("velocity", velocity)
    return _drag_factor(v) * velocity * velocity


def power_required(v: Vehicle, velocity: float) -> float:
    """Watts needed to hold `velocity` against aero drag."""
    return drag_force(v, velocity) * velocity


def lap_time(v: Vehicle, track_length: float, turns: int) -> float:
    """
    Turn zones (50 m each) at 60% of max speed, the rest at 90%,
    plus 1.5 s per turn to get back on the power.
    """
    _positive("track_length", track_length)
    vmax = _positive("max_speed_mps", v.max_speed_mps)
    if isinstance(turns, bool) or not isinstance(turns, Integral) or turns < 0:
        raise InvalidParameter(f"turns must be an int >= 0, got {turns!r}")
    turns = int(turns)
    turn_m = turns * TURN_ZONE_M
    if turn_m > track_length:
        raise InvalidParameter(f"{turns} turns need {turn_m} m, track is {track_length} m")

    turn_s = turn_m / (vmax * TURN_SPEED_FACTOR)
    straight_s = (track_length - turn_m) / (vmax * STRAIGHT_SPEED_FACTOR)
    return turn_s + straight_s + turns * TURN_PENALTY_S


# ---------------- report ----------------


def mps_to_mph(mps: float) -> float:
    return mps * MPS_TO_MPH


def m_to_ft(m: float) -> float:
    return m * M_TO_FT


def watts_to_hp(w: float) -> float:
    return w / HP_TO_WATTS


@dataclass(frozen=True)
class PerformanceReport:
    vehicle: str
    terminal_velocity_mps: float
    acceleration_time_s: float  # 0 -> target_speed
    braking_distance_m: float  # target_speed -> 0
    drag_force_n: float  # at max speed
    power_required_w: float  # at max speed
    lap_time_s: float
    target_speed_mps: float
    track_length_m: float
    turns: int


def performance_report(
    v: Vehicle,
    *,
    target_speed: float = 26.8,  # 60 mph
    track_length: float = 5000.0,
    turns: int = 12,
) -> PerformanceReport:
    return PerformanceReport(
        vehicle=v.name,
        terminal_velocity_mps=terminal_velocity(v),
        acceleration_time_s=acceleration_time(v, target_speed),
        braking_distance_m=braking_distance(v, target_speed),
        drag_force_n=drag_force(v, v.max_speed_mps),
        power_required_w=power_required(v, v.max_speed_mps),
        lap_time_s=lap_time(v, track_length, turns),
        target_speed_mps=target_speed,
        track_length_m=track_length,
        turns=int(turns),
    )
