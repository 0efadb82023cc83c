# garage_sim/io/recorder.py
"""
Fan-out of business events (route and performance analytics) to sinks.

A sink that raises is counted in `Recorder.dropped` and logged; the route
query or report that produced the event still completes.
"""

import json
import logging
import sys
from dataclasses import asdict
from typing import Protocol

from garage_sim.io.business_events import BizEvent

log = logging.getLogger("garage_sim.recorder")


class Sink(Protocol):
    def write(self, ev: BizEvent) -> None: ...


class JsonlSink:
    """One JSON object per event. Tuples (route nodes) come out as lists."""

    def __init__(self, fp=None, *, flush: bool = False):
        self.fp = fp
        self.flush = flush

    def write(self, ev: BizEvent) -> None:
        fp = sys.stdout if self.fp is None else self.fp
        fp.write(json.dumps(asdict(ev)) + "\n")
        if self.flush:
            fp.flush()


class MemorySink:
    def __init__(self):
        self.events: list[BizEvent] = []

    def write(self, ev: BizEvent) -> None:
        self.events.append(ev)

    def named(self, name: str) -> list[BizEvent]:
        return [ev for ev in self.events if ev.name == name]


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)
        self.dropped = 0

    def emit(self, ev: BizEvent) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception as exc:
                self.dropped += 1
                log.warning(
                    "sink_write_failed",
                    extra={
                        "extra": {
                            "sink": type(s).__name__,
                            "event": ev.name,
                            "seq": ev.seq,
                            "error": repr(exc),
                        }
                    },
                )
