# garage_sim/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from garage_sim.app.protocols import RoutePlanner
from garage_sim.config.models import ScenarioModel
from garage_sim.domain.entities.geography import LocationGraph
from garage_sim.domain.entities.vehicle import Part, Vehicle
from garage_sim.io.hooks import NoopHooks, SearchHooks
from garage_sim.io.recorder import JsonlSink, Recorder, Sink
from garage_sim.io.search_logging import SearchLogging  # JSON logs
from garage_sim.runtime.registries import make_fleet, make_graph, make_route_planner
from garage_sim.services.navigation import NavigationService
from garage_sim.services.performance import PerformanceService


@dataclass
class App:
    graph: LocationGraph
    vehicles: list[Vehicle]
    parts: list[Part]
    planner: RoutePlanner
    navigation: NavigationService
    performance: PerformanceService
    hooks: SearchHooks


def build(
    cfg: ScenarioModel | Mapping | None = None,
    *,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = ScenarioModel()
    else:
        model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Hooks (logging + analytics recorder)
    hooks = (
        SearchLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=Recorder(*(sinks if sinks is not None else [JsonlSink()])),
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Static inputs: graph and fleet
    graph = make_graph(model.layout)
    vehicles, parts = make_fleet(model.fleet)

    # 3) Planner & services
    planner = make_route_planner(model.route_planner, deps={"graph": graph, "hooks": hooks})
    navigation = NavigationService(planner)
    performance = PerformanceService(vehicles, model.performance, hooks=hooks)

    return App(graph, vehicles, parts, planner, navigation, performance, hooks)
