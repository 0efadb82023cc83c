import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from garage_sim.domain.entities.geography import MAX_LOCATIONS, Direction
from garage_sim.domain.entities.vehicle import PartType, VehicleType
from garage_sim.domain.mechanics.mechanics_performance import TURN_ZONE_M

DirectionName = Literal["north", "south", "east", "west", "n", "s", "e", "w"]


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- LAYOUT ---------------------


class LocationModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: int = Field(ge=0, lt=MAX_LOCATIONS)
    name: str = Field(min_length=1)
    x: float
    y: float
    exits: dict[DirectionName, str | int] = Field(default_factory=dict)  # omitted => no passage
    has_vehicle_access: bool = False
    has_computer: bool = False

    @field_validator("x", "y")
    @classmethod
    def _finite(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v):
            raise ValueError(f"{info.field_name} must be finite")
        return v

    @field_validator("exits")
    @classmethod
    def _one_per_direction(cls, v: dict):
        seen = [Direction.parse(k) for k in v]
        if len(set(seen)) != len(seen):
            raise ValueError("each direction may appear once (e.g. not both 'n' and 'north')")
        return v


class LayoutBuiltinModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["builtin"] = "builtin"
    name: Literal["garage"] = "garage"


class LayoutInlineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["inline"] = "inline"
    locations: list[LocationModel] = Field(min_length=1, max_length=MAX_LOCATIONS)

    @model_validator(mode="after")
    def _dense_ids(self):
        ids = sorted(loc.id for loc in self.locations)
        if ids != list(range(len(ids))):
            raise ValueError(f"location ids must be dense 0..{len(ids) - 1}, got {ids}")
        names = [loc.name.lower() for loc in self.locations]
        if len(set(names)) != len(names):
            raise ValueError("location names must be unique (case-insensitive)")
        return self


class LayoutFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["file"] = "file"
    file: str
    fmt: Literal["json"] = "json"

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


LayoutUnion = Annotated[
    LayoutBuiltinModel | LayoutInlineModel | LayoutFileModel,
    Field(discriminator="kind"),
]


# ----------------- FLEET ---------------------


class VehicleModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = Field(min_length=1)
    type: VehicleType = VehicleType.NONE
    mass_kg: float
    engine_power_hp: float
    drag_coefficient: float
    frontal_area_m2: float
    max_speed_mps: float
    acceleration_mps2: float

    @field_validator(
        "mass_kg",
        "engine_power_hp",
        "drag_coefficient",
        "frontal_area_m2",
        "max_speed_mps",
        "acceleration_mps2",
    )
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be finite and > 0")
        return v


class PartModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = Field(min_length=1)
    type: PartType
    weight_kg: float = Field(ge=0)
    cost: float = Field(ge=0)
    performance_boost_pct: int = Field(ge=0)


class FleetBuiltinModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["builtin"] = "builtin"
    name: Literal["garage"] = "garage"


class FleetInlineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["inline"] = "inline"
    vehicles: list[VehicleModel] = Field(min_length=1)
    parts: list[PartModel] = Field(default_factory=list)


FleetUnion = Annotated[FleetBuiltinModel | FleetInlineModel, Field(discriminator="kind")]


# ----------------- ROUTE PLANNERS ---------------------


class RoutePlannerAStarModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["astar"] = "astar"
    heuristic_weight: float = Field(default=1.0, gt=0)
    max_path_length: int = Field(default=100, ge=MAX_LOCATIONS)


class RoutePlannerDijkstraModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["dijkstra"] = "dijkstra"
    max_path_length: int = Field(default=100, ge=MAX_LOCATIONS)


RoutePlannerUnion = Annotated[
    RoutePlannerAStarModel | RoutePlannerDijkstraModel,
    Field(discriminator="kind"),
]


# ----------------- PERFORMANCE ---------------------


class PerformanceScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    target_speed_mps: float = Field(default=26.8, ge=0)  # 0-60 mph
    track_length_m: float = Field(default=5000.0, gt=0)
    turns: int = Field(default=12, ge=0)

    @model_validator(mode="after")
    def _turns_fit(self):
        need = self.turns * TURN_ZONE_M
        if need > self.track_length_m:
            raise ValueError(f"{self.turns} turns need {need} m; track is {self.track_length_m} m")
        return self


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "garage"
    run_id: str = "local"
    log: LogModel = LogModel()
    layout: LayoutUnion = Field(default_factory=LayoutBuiltinModel)
    fleet: FleetUnion = Field(default_factory=FleetBuiltinModel)
    route_planner: RoutePlannerUnion = Field(default_factory=RoutePlannerAStarModel)
    performance: PerformanceScenarioModel = Field(default_factory=PerformanceScenarioModel)
