# runtime/registries.py
from collections.abc import Callable

from garage_sim.app.protocols import RoutePlanner
from garage_sim.config.models import (
    FleetBuiltinModel,
    FleetInlineModel,
    FleetUnion,
    LayoutBuiltinModel,
    LayoutFileModel,
    LayoutInlineModel,
    LayoutUnion,
    RoutePlannerAStarModel,
    RoutePlannerDijkstraModel,
    RoutePlannerUnion,
)
from garage_sim.domain.entities.geography import LocationGraph
from garage_sim.domain.entities.vehicle import Part, PartType, Vehicle, VehicleType
from garage_sim.domain.mechanics.mechanics_routers import AStarRoutePlanner, DijkstraRoutePlanner
from garage_sim.runtime.resources import builtin_fleet, builtin_layout, load_layout_from_path

RoutePlannerFactory = Callable[[RoutePlannerUnion, dict], RoutePlanner]

_route_planner_registry: dict[str, RoutePlannerFactory] = {}


# ------------------- Layouts ---------------------------


def make_graph(cfg: LayoutUnion) -> LocationGraph:
    if isinstance(cfg, LayoutBuiltinModel):
        rows = builtin_layout(cfg.name)
    elif isinstance(cfg, LayoutInlineModel):
        rows = [loc.model_dump() for loc in cfg.locations]
    elif isinstance(cfg, LayoutFileModel):
        rows = load_layout_from_path(cfg.file, cfg.fmt)
    else:
        raise TypeError(cfg)
    return LocationGraph.from_table(rows)


# ------------------- Fleet ---------------------------


def make_fleet(cfg: FleetUnion) -> tuple[list[Vehicle], list[Part]]:
    if isinstance(cfg, FleetBuiltinModel):
        vehicles, parts = builtin_fleet(cfg.name)
    elif isinstance(cfg, FleetInlineModel):
        vehicles = [v.model_dump() for v in cfg.vehicles]
        parts = [p.model_dump() for p in cfg.parts]
    else:
        raise TypeError(cfg)
    return (
        [Vehicle(**{**v, "type": VehicleType(v["type"])}) for v in vehicles],
        [Part(**{**p, "type": PartType(p["type"])}) for p in parts],
    )


# --------------------- Route Planners  ---------------------
def register_route_planner(kind: str):
    def deco(fn):
        _route_planner_registry[kind] = fn
        return fn

    return deco


def make_route_planner(cfg: RoutePlannerUnion, *, deps: dict) -> RoutePlanner:
    """
    deps must include:
      - 'graph': LocationGraph
    and can include:
      - 'hooks': SearchHooks
    """
    try:
        factory = _route_planner_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown route planner kind {cfg.kind!r}") from None
    return factory(cfg, deps)


@register_route_planner("astar")
def _make_astar(cfg: RoutePlannerAStarModel, deps):
    return AStarRoutePlanner(
        deps["graph"],
        heuristic_weight=cfg.heuristic_weight,
        max_path_length=cfg.max_path_length,
        hooks=deps.get("hooks"),
    )


@register_route_planner("dijkstra")
def _make_dijkstra(cfg: RoutePlannerDijkstraModel, deps):
    return DijkstraRoutePlanner(
        deps["graph"], max_path_length=cfg.max_path_length, hooks=deps.get("hooks")
    )
