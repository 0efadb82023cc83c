# io/hooks.py
from typing import Protocol


class SearchHooks(Protocol):
    def search_start(self, *, algo, start, goal): ...
    def search_end(self, *, algo, start, goal, nodes, length_m, wall_ms): ...
    def no_path(self, *, algo, start, goal, wall_ms): ...
    def warning(self, msg: str, **extra): ...
    def performance(self, report, **extra): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def no_path(self, **_):
        pass

    def warning(self, *_, **__):
        pass

    def performance(self, *_, **__):
        pass
