# dhaka_routing/domain/itinerary.py
"""
Turn a raw edge sequence into a presentation-ready itinerary.

Consecutive edges of the same mode that chain end-to-start are coalesced into one
Segment. Walk legs bridge the gap between the true endpoints and the snapped
network locations. Costs are recomputed per coalesced segment, after coalescing.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from dhaka_routing.domain.entities.geography import Edge, Location, TransportMode
from dhaka_routing.domain.network import NetworkGraph
from dhaka_routing.domain.search import SearchStatus
from dhaka_routing.policy.cost import CostPolicy, Objective

WALK_THRESHOLD_KM = 0.001


@dataclass(frozen=True)
class Segment:
    start: Location
    end: Location
    mode: TransportMode
    distance_km: float
    cost: float = 0.0
    start_name: str = ""
    end_name: str = ""


@dataclass(frozen=True)
class Itinerary:
    segments: tuple[Segment, ...]
    total: float
    objective: Objective
    policy: str = ""
    status: SearchStatus = SearchStatus.REACHED

    @property
    def total_distance_km(self) -> float:
        return sum(s.distance_km for s in self.segments)

    @property
    def total_cost(self) -> float:
        return sum(s.cost for s in self.segments)

    @property
    def transit_segments(self) -> tuple[Segment, ...]:
        return tuple(s for s in self.segments if s.mode is not TransportMode.WALK)

    @property
    def is_walk_only(self) -> bool:
        return bool(self.segments) and not self.transit_segments


@dataclass
class _Run:
    mode: TransportMode
    start: Location
    end: Location
    distance_km: float


def coalesce(edges: Sequence[Edge]) -> list[_Run]:
    runs: list[_Run] = []
    for e in edges:
        cur = runs[-1] if runs else None
        if cur is not None and cur.mode is e.mode and cur.end == e.start:
            cur.end = e.end
            cur.distance_km += e.distance_km
        else:
            runs.append(_Run(e.mode, e.start, e.end, e.distance_km))
    return runs


def _walk(a: Location, b: Location) -> Segment | None:
    d = a.distance_km(b)
    if d > WALK_THRESHOLD_KM:
        return Segment(a, b, TransportMode.WALK, d)
    return None


def assemble(
    edges: Sequence[Edge],
    source: Location,
    destination: Location,
    policy: CostPolicy,
    graph: NetworkGraph,
    *,
    status: SearchStatus | None = None,
) -> Itinerary:
    """
    Build the itinerary for `edges` between the original (unsnapped) endpoints.

    With empty `edges` the original points stand in for the snapped entry and
    exit, so the itinerary has no segments and a zero total. Callers pass
    `status` from the search result to keep "unreachable" distinguishable from
    "already there".
    """
    entry = edges[0].start if edges else source
    exit_ = edges[-1].end if edges else destination

    segments: list[Segment] = []
    lead = _walk(source, entry)
    if lead is not None:
        segments.append(lead)
    for run in coalesce(edges):
        segments.append(
            Segment(
                start=run.start,
                end=run.end,
                mode=run.mode,
                distance_km=run.distance_km,
                cost=policy.segment_cost(run.mode, run.distance_km),
                start_name=graph.station_name(run.start),
                end_name=graph.station_name(run.end),
            )
        )
    tail = _walk(exit_, destination)
    if tail is not None:
        segments.append(tail)

    if policy.objective is Objective.DISTANCE:
        total = sum(s.distance_km for s in segments)
    else:
        total = sum(s.cost for s in segments)

    if status is None:
        status = SearchStatus.REACHED if edges else SearchStatus.TRIVIAL
    return Itinerary(tuple(segments), total, policy.objective, policy.name, status)
