# domain/hooks.py
from typing import Protocol

from dhaka_routing.domain.entities.geography import Location


class SearchHooks(Protocol):
    def bind(self, **context) -> "SearchHooks": ...
    def search_start(self, *, source: Location, destination: Location, modes): ...
    def search_end(self, *, status, settled: int, cost: float, edges: int, ms: float): ...


class NoopHooks:
    def bind(self, **_) -> "NoopHooks":
        return self

    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass
