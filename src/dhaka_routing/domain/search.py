# domain/search.py
import heapq
import math
import time
from collections.abc import Callable, Collection
from dataclasses import dataclass
from enum import Enum

from dhaka_routing.domain.entities.geography import Edge, Location, TransportMode
from dhaka_routing.domain.hooks import NoopHooks, SearchHooks
from dhaka_routing.domain.network import NetworkGraph

CostFn = Callable[[Edge], float]


class SearchStatus(Enum):
    REACHED = "reached"
    TRIVIAL = "trivial"  # source == destination, nothing to ride
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class SearchResult:
    status: SearchStatus
    edges: tuple[Edge, ...] = ()
    cost: float = 0.0
    settled: int = 0

    @property
    def found(self) -> bool:
        return self.status is not SearchStatus.UNREACHABLE


def search(
    graph: NetworkGraph,
    source: Location,
    destination: Location,
    allowed_modes: Collection[TransportMode],
    cost_fn: CostFn,
    *,
    hooks: SearchHooks | None = None,
) -> SearchResult:
    """
    Dijkstra from `source` to `destination` over edges whose mode is allowed.

    `cost_fn` must be non-negative; that is the caller's contract and is not checked.
    Edges outside `allowed_modes` are skipped, never priced. Both degenerate outcomes
    (TRIVIAL, UNREACHABLE) carry an empty edge tuple.
    """
    hooks = hooks or NoopHooks()
    hooks.search_start(source=source, destination=destination, modes=allowed_modes)
    t0 = time.perf_counter()

    if source == destination:
        res = SearchResult(SearchStatus.TRIVIAL)
        hooks.search_end(status=res.status, settled=0, cost=0.0, edges=0, ms=0.0)
        return res

    best: dict[Location, float] = {source: 0.0}
    via: dict[Location, Edge] = {}  # node -> edge that reached it on the best path
    settled: set[Location] = set()
    seq = 0
    q: list[tuple[float, int, Location]] = [(0.0, seq, source)]

    while q:
        d, _, u = heapq.heappop(q)
        if u in settled:
            continue  # stale entry
        settled.add(u)
        if u == destination:
            break
        for edge in graph.neighbors(u):
            if edge.mode not in allowed_modes or edge.end in settled:
                continue
            nd = d + cost_fn(edge)
            if nd < best.get(edge.end, math.inf):
                best[edge.end] = nd
                via[edge.end] = edge
                seq += 1
                heapq.heappush(q, (nd, seq, edge.end))

    if destination not in settled:
        res = SearchResult(SearchStatus.UNREACHABLE, cost=math.inf, settled=len(settled))
    else:
        res = SearchResult(
            SearchStatus.REACHED,
            edges=_reconstruct(via, source, destination),
            cost=best[destination],
            settled=len(settled),
        )
    hooks.search_end(
        status=res.status,
        settled=res.settled,
        cost=res.cost,
        edges=len(res.edges),
        ms=(time.perf_counter() - t0) * 1000,
    )
    return res


def _reconstruct(
    via: dict[Location, Edge], source: Location, destination: Location
) -> tuple[Edge, ...]:
    path: list[Edge] = []
    cur = destination
    while cur != source:
        edge = via[cur]
        path.append(edge)
        cur = edge.start
    path.reverse()
    return tuple(path)
