# dhaka_routing/policy/cost.py
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from dhaka_routing.domain.entities.geography import Edge, TransportMode

CAR_RATE = 20.0  # Tk per km
METRO_RATE = 5.0
BUS_RATE = 7.0


class Objective(Enum):
    DISTANCE = "distance"
    COST = "cost"


@dataclass(frozen=True)
class CostPolicy:
    """
    Allowed-mode set plus per-edge weight. Edges whose mode is outside `modes`
    are excluded from the search rather than priced.
    """

    name: str
    objective: Objective
    modes: frozenset[TransportMode]
    rates: Mapping[TransportMode, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def edge_cost(self, edge: Edge) -> float:
        if self.objective is Objective.DISTANCE:
            return edge.distance_km
        return edge.distance_km * self.rates.get(edge.mode, 0.0)

    def segment_cost(self, mode: TransportMode, distance_km: float) -> float:
        if self.objective is Objective.DISTANCE or mode is TransportMode.WALK:
            return 0.0
        return distance_km * self.rates.get(mode, 0.0)


@dataclass(frozen=True)
class Problem:
    id: int
    title: str
    policy: CostPolicy

    @property
    def shows_cost(self) -> bool:
        return self.policy.objective is Objective.COST
