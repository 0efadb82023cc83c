# io/search_logging.py
import json
import logging
import sys
from dataclasses import asdict

from garage_sim.domain.mechanics.mechanics_performance import PerformanceReport
from garage_sim.io.business_events import (
    PerformanceComputedBiz,
    RouteComputedBiz,
    RouteNotFoundBiz,
)
from garage_sim.io.hooks import NoopHooks
from garage_sim.io.recorder import Recorder


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload)


def _default_json_logger(name="garage_sim", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SearchLogging(NoopHooks):
    """
    One place to shape and emit structured logs for route searches and
    performance reports, and to forward them to the analytics recorder.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.recorder = run_id, debug, recorder
        self.log = logger or _default_json_logger(level=level)
        self._seq = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def _biz(self, cls, name: str, **fields):
        if self.recorder:
            self.recorder.emit(cls(run_id=self.run_id, seq=self._next_seq(), name=name, **fields))

    # --------------------------------------------------------

    def search_start(self, *, algo, start, goal):
        if self.debug:
            self._emit("DEBUG", "search_start", algo=algo, start=start, goal=goal)

    def search_end(self, *, algo, start, goal, nodes, length_m, wall_ms):
        nodes = tuple(nodes)
        self._emit(
            "INFO",
            "route_found",
            algo=algo,
            start=start,
            goal=goal,
            nodes=list(nodes),
            length_m=length_m,
            wall_ms=wall_ms,
        )
        self._biz(
            RouteComputedBiz,
            "RouteComputed",
            algo=algo,
            start=start,
            goal=goal,
            nodes=nodes,
            length_m=length_m,
            wall_ms=wall_ms,
        )

    def no_path(self, *, algo, start, goal, wall_ms):
        self._emit("WARNING", "route_not_found", algo=algo, start=start, goal=goal, wall_ms=wall_ms)
        self._biz(
            RouteNotFoundBiz, "RouteNotFound", algo=algo, start=start, goal=goal, wall_ms=wall_ms
        )

    def warning(self, msg: str, **extra):
        self._emit("WARNING", msg, **extra)

    def performance(self, report: PerformanceReport, **extra):
        data = asdict(report)
        self._emit("INFO", "performance_report", **data, **extra)
        self._biz(
            PerformanceComputedBiz,
            "PerformanceComputed",
            vehicle=report.vehicle,
            terminal_velocity_mps=report.terminal_velocity_mps,
            acceleration_time_s=report.acceleration_time_s,
            braking_distance_m=report.braking_distance_m,
            drag_force_n=report.drag_force_n,
            power_required_w=report.power_required_w,
            lap_time_s=report.lap_time_s,
        )
