# garage_sim/services/performance.py
from garage_sim.config.models import PerformanceScenarioModel
from garage_sim.domain.entities.vehicle import Vehicle
from garage_sim.domain.errors import UnknownVehicle
from garage_sim.domain.mechanics.mechanics_performance import PerformanceReport, performance_report
from garage_sim.io.hooks import NoopHooks, SearchHooks


class PerformanceService:
    def __init__(
        self,
        vehicles: list[Vehicle],
        scenario: PerformanceScenarioModel | None = None,
        *,
        hooks: SearchHooks | None = None,
    ):
        self.vehicles = vehicles
        self.scenario = scenario or PerformanceScenarioModel()
        self.hooks = hooks or NoopHooks()

    def vehicle(self, key: str | int = 0) -> Vehicle:
        """Fleet index (0-based, no negative indexing) or case-insensitive name fragment."""
        if isinstance(key, int) and not isinstance(key, bool):
            if 0 <= key < len(self.vehicles):
                return self.vehicles[key]
            raise UnknownVehicle(f"no vehicle #{key} in a fleet of {len(self.vehicles)}")
        k = str(key).strip().lower()
        if k:
            for v in self.vehicles:
                if k in v.name.lower():
                    return v
        raise UnknownVehicle(f"no vehicle matching {key!r}")

    def report(self, key: str | int = 0) -> PerformanceReport:
        v = self.vehicle(key)
        rep = performance_report(
            v,
            target_speed=self.scenario.target_speed_mps,
            track_length=self.scenario.track_length_m,
            turns=self.scenario.turns,
        )
        self.hooks.performance(rep)
        return rep
