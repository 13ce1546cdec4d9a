# dhaka_routing/app/solver.py
import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field

from dhaka_routing.config.models import default_problems
from dhaka_routing.domain.entities.geography import Location, TransportMode
from dhaka_routing.domain.hooks import SearchHooks
from dhaka_routing.domain.itinerary import Itinerary, assemble
from dhaka_routing.domain.network import NetworkGraph
from dhaka_routing.domain.search import search
from dhaka_routing.io.query_events import QuerySolved
from dhaka_routing.io.recorder import Recorder
from dhaka_routing.policy.cost import Problem
from dhaka_routing.runtime.registries import make_problems


class UnknownProblemError(KeyError):
    pass


def default_problem_table() -> dict[int, Problem]:
    return make_problems(default_problems())


@dataclass
class RoutingSolver:
    """
    Query surface: snap both endpoints, search under the problem's cost policy,
    assemble the itinerary. The graph is shared read-only across queries.
    """

    graph: NetworkGraph
    problems: dict[int, Problem] = field(default_factory=default_problem_table)
    hooks: SearchHooks | None = None
    recorder: Recorder | None = None
    run_id: str = "local"
    _seq: Iterator[int] = field(default_factory=lambda: itertools.count(1), init=False, repr=False)

    def problem(self, problem_id: int) -> Problem:
        try:
            return self.problems[problem_id]
        except KeyError:
            raise UnknownProblemError(
                f"unknown problem {problem_id!r}; configured: {sorted(self.problems)}"
            ) from None

    def solve(self, problem_id: int, source: Location, destination: Location) -> Itinerary:
        problem = self.problem(problem_id)
        policy = problem.policy
        # bound per query so concurrent solves never share log context
        hooks = None
        if self.hooks is not None:
            hooks = self.hooks.bind(problem=problem_id, policy=policy.name)

        entry = self.graph.nearest_location(source)
        exit_ = self.graph.nearest_location(destination)
        res = search(self.graph, entry, exit_, policy.modes, policy.edge_cost, hooks=hooks)
        itinerary = assemble(res.edges, source, destination, policy, self.graph, status=res.status)

        seq = next(self._seq)
        if self.recorder is not None:
            self.recorder.emit(
                QuerySolved(
                    run_id=self.run_id,
                    seq=seq,
                    name="QuerySolved",
                    problem_id=problem_id,
                    policy=policy.name,
                    status=res.status.value,
                    source=(source.lat, source.lon),
                    destination=(destination.lat, destination.lon),
                    segments=len(itinerary.segments),
                    walk_km=sum(
                        s.distance_km for s in itinerary.segments if s.mode is TransportMode.WALK
                    ),
                    total=itinerary.total,
                    objective=itinerary.objective.value,
                )
            )
        return itinerary

    def solve_all(self, source: Location, destination: Location) -> dict[int, Itinerary]:
        return {pid: self.solve(pid, source, destination) for pid in self.problems}
