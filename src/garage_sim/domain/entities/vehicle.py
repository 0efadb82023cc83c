# domain/entities/vehicle.py
from dataclasses import dataclass, field
from enum import Enum

from garage_sim.domain.errors import InvalidParameter

MAX_PARTS = 50


class VehicleType(Enum):
    NONE = "none"
    SPORTS_CAR = "sports_car"
    TRUCK = "truck"
    MOTORCYCLE = "motorcycle"
    RACE_CAR = "race_car"
    CLASSIC_CAR = "classic_car"

    @property
    def label(self) -> str:
        return "Unknown" if self is VehicleType.NONE else self.value.replace("_", " ").title()


class PartType(Enum):
    ENGINE = "engine"
    TRANSMISSION = "transmission"
    WHEELS = "wheels"
    BRAKES = "brakes"
    SUSPENSION = "suspension"
    TURBOCHARGER = "turbocharger"
    EXHAUST = "exhaust"
    ECU = "ecu"

    @property
    def label(self) -> str:
        return "ECU" if self is PartType.ECU else self.value.title()


@dataclass
class Part:
    name: str
    type: PartType
    weight_kg: float
    cost: float
    performance_boost_pct: int
    installed: bool = False


@dataclass
class Vehicle:
    name: str
    type: VehicleType
    mass_kg: float
    engine_power_hp: float
    drag_coefficient: float  # Cd
    frontal_area_m2: float
    max_speed_mps: float
    acceleration_mps2: float
    parts: list[Part] = field(default_factory=list)


def install_part(vehicle: Vehicle, part: Part) -> Vehicle:
    """
    Fit a loose part and scale the vehicle in place:
    power by boost%, top speed by half the boost%, mass by the part weight.
    """
    if part.installed:
        raise InvalidParameter(f"{part.name!r} is already installed")
    if len(vehicle.parts) >= MAX_PARTS:
        raise InvalidParameter(f"{vehicle.name!r} has no room for more parts")

    vehicle.parts.append(part)
    part.installed = True

    vehicle.engine_power_hp *= 1.0 + part.performance_boost_pct / 100.0
    vehicle.max_speed_mps *= 1.0 + part.performance_boost_pct / 200.0
    vehicle.mass_kg += part.weight_kg
    return vehicle
