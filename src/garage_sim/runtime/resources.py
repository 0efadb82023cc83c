# garage_sim/runtime/resources.py
import json
from functools import lru_cache

# Garage floor plan. Exits not listed lead nowhere.
GARAGE_LAYOUT: tuple[dict, ...] = (
    {"id": 0, "name": "Garage Entrance", "x": 0, "y": 0,
     "exits": {"north": "Main Garage Bay", "east": "Office"},
     "has_vehicle_access": True},
    {"id": 1, "name": "Main Garage Bay", "x": 0, "y": 10,
     "exits": {"north": "Workshop", "south": "Garage Entrance",
               "east": "Parts Storage", "west": "Tool Room"},
     "has_vehicle_access": True},
    {"id": 2, "name": "Workshop", "x": 0, "y": 20,
     "exits": {"south": "Main Garage Bay", "east": "Paint Booth"},
     "has_vehicle_access": True},
    {"id": 3, "name": "Parts Storage", "x": 10, "y": 10,
     "exits": {"north": "Computer Lab", "west": "Main Garage Bay"}},
    {"id": 4, "name": "Paint Booth", "x": 10, "y": 20,
     "exits": {"north": "Testing Track", "east": "Showroom", "west": "Workshop"},
     "has_vehicle_access": True},
    {"id": 5, "name": "Testing Track", "x": 10, "y": 30,
     "exits": {"south": "Paint Booth"},
     "has_vehicle_access": True, "has_computer": True},
    {"id": 6, "name": "Office", "x": 10, "y": 0,
     "exits": {"west": "Garage Entrance"},
     "has_computer": True},
    {"id": 7, "name": "Tool Room", "x": -10, "y": 10,
     "exits": {"east": "Main Garage Bay"}},
    {"id": 8, "name": "Computer Lab", "x": 10, "y": 20,
     "exits": {"south": "Parts Storage", "east": "Showroom"},
     "has_computer": True},
    {"id": 9, "name": "Showroom", "x": 20, "y": 20,
     "exits": {"west": "Computer Lab"},
     "has_vehicle_access": True},
)  # fmt: skip

GARAGE_VEHICLES: tuple[dict, ...] = (
    {"name": "Lightning GT", "type": "sports_car", "mass_kg": 1400.0,
     "engine_power_hp": 450.0, "drag_coefficient": 0.28, "frontal_area_m2": 2.2,
     "max_speed_mps": 95.0, "acceleration_mps2": 12.0},
    {"name": "Thunder Truck", "type": "truck", "mass_kg": 2500.0,
     "engine_power_hp": 380.0, "drag_coefficient": 0.42, "frontal_area_m2": 3.5,
     "max_speed_mps": 55.0, "acceleration_mps2": 6.0},
    {"name": "Velocity Viper", "type": "race_car", "mass_kg": 1100.0,
     "engine_power_hp": 600.0, "drag_coefficient": 0.25, "frontal_area_m2": 1.8,
     "max_speed_mps": 105.0, "acceleration_mps2": 15.0},
)  # fmt: skip

GARAGE_PARTS: tuple[dict, ...] = (
    {"name": "Twin-Turbo Kit", "type": "turbocharger", "weight_kg": 25.0,
     "cost": 5000.0, "performance_boost_pct": 30},
    {"name": "Racing Exhaust", "type": "exhaust", "weight_kg": 15.0,
     "cost": 2000.0, "performance_boost_pct": 10},
    {"name": "Performance ECU", "type": "ecu", "weight_kg": 2.0,
     "cost": 3500.0, "performance_boost_pct": 20},
    {"name": "Carbon Brakes", "type": "brakes", "weight_kg": 20.0,
     "cost": 4500.0, "performance_boost_pct": 15},
    {"name": "Racing Suspension", "type": "suspension", "weight_kg": 30.0,
     "cost": 3000.0, "performance_boost_pct": 12},
)  # fmt: skip

_BUILTIN_LAYOUTS = {"garage": GARAGE_LAYOUT}
_BUILTIN_FLEETS = {"garage": (GARAGE_VEHICLES, GARAGE_PARTS)}


def builtin_layout(name: str) -> tuple[dict, ...]:
    try:
        return _BUILTIN_LAYOUTS[name]
    except KeyError:
        raise ValueError(f"Unknown builtin layout {name!r}") from None


def builtin_fleet(name: str) -> tuple[tuple[dict, ...], tuple[dict, ...]]:
    try:
        return _BUILTIN_FLEETS[name]
    except KeyError:
        raise ValueError(f"Unknown builtin fleet {name!r}") from None


@lru_cache(maxsize=8)
def load_layout_from_path(file: str, fmt: str) -> tuple[dict, ...]:
    if fmt == "json":
        with open(file, encoding="utf-8") as f:
            data = json.load(f)
        rows = data["locations"] if isinstance(data, dict) else data
        return tuple(rows)
    raise ValueError(f"Unsupported layout fmt {fmt!r}")
