from dhaka_routing.config.models import default_problems
from dhaka_routing.domain.entities.geography import Edge, Location, TransportMode
from dhaka_routing.domain.itinerary import WALK_THRESHOLD_KM, Segment, assemble, coalesce
from dhaka_routing.domain.network import NetworkGraph
from dhaka_routing.domain.search import SearchStatus
from dhaka_routing.policy.cost import Objective
from dhaka_routing.runtime.registries import make_problems

CAR, METRO, WALK = TransportMode.CAR, TransportMode.METRO, TransportMode.WALK

PROBLEMS = make_problems(default_problems())
DISTANCE, ALL_MODES = PROBLEMS[1].policy, PROBLEMS[3].policy

A = Location(23.80, 90.40)
B = Location(23.80, 90.41)
C = Location(23.80, 90.42)
D = Location(23.80, 90.43)
E = Location(23.80, 90.44)


def named_graph() -> NetworkGraph:
    g = NetworkGraph()
    g.add_metro_station(C, "Karwan Bazar")
    g.add_metro_station(E, "Shahbag")
    return g


FINE = [
    Edge(A, B, 1.5, CAR),
    Edge(B, C, 2.5, CAR),
    Edge(C, D, 0.25, METRO),
    Edge(D, E, 0.75, METRO),
]


# ---------- coalescing


def test_consecutive_same_mode_edges_merge():
    it = assemble(FINE, A, E, ALL_MODES, named_graph())
    assert [s.mode for s in it.segments] == [CAR, METRO]
    car, metro = it.segments
    assert (car.start, car.end, car.distance_km) == (A, C, 4.0)
    assert (metro.start, metro.end, metro.distance_km) == (C, E, 1.0)
    assert (car.start_name, car.end_name) == ("", "Karwan Bazar")
    assert (metro.start_name, metro.end_name) == ("Karwan Bazar", "Shahbag")


def test_coalescing_is_idempotent():
    coarse = [Edge(A, C, 4.0, CAR), Edge(C, E, 1.0, METRO)]
    g, policy = named_graph(), ALL_MODES
    fine_it = assemble(FINE, A, E, policy, g)
    coarse_it = assemble(coarse, A, E, policy, g)
    assert fine_it.segments == coarse_it.segments
    assert fine_it.total == coarse_it.total
    assert len(coalesce(coarse)) == len(coalesce(FINE)) == 2


def test_same_mode_without_chaining_is_not_merged():
    edges = [Edge(A, B, 1.0, CAR), Edge(C, D, 1.0, CAR)]
    runs = coalesce(edges)
    assert len(runs) == 2


def test_alternating_modes_stay_separate():
    edges = [Edge(A, B, 1.0, CAR), Edge(B, C, 1.0, METRO), Edge(C, D, 1.0, CAR)]
    assert [r.mode for r in coalesce(edges)] == [CAR, METRO, CAR]


# ---------- costing


def test_costs_are_recomputed_per_coalesced_segment():
    edges = [Edge(A, B, 0.1, CAR), Edge(B, C, 0.1, CAR), Edge(C, D, 0.1, CAR)]
    it = assemble(edges, A, D, ALL_MODES, NetworkGraph())
    (seg,) = it.segments
    assert seg.cost == seg.distance_km * 20.0
    assert it.total == seg.cost
    assert it.objective is Objective.COST


def test_fare_total_is_sum_of_segment_costs():
    it = assemble(FINE, A, E, ALL_MODES, named_graph())
    assert [s.cost for s in it.segments] == [80.0, 5.0]
    assert it.total == 85.0
    assert it.total_cost == 85.0
    assert it.policy == "all_modes"


def test_distance_total_counts_walks_and_costs_are_zero():
    src = Location(23.81, 90.40)  # ~1.1 km north of A
    it = assemble([Edge(A, B, 1.5, CAR)], src, B, DISTANCE, NetworkGraph())
    walk, car = it.segments
    assert walk.mode is WALK and car.mode is CAR
    assert all(s.cost == 0.0 for s in it.segments)
    assert abs(it.total - (walk.distance_km + 1.5)) < 1e-12
    assert it.objective is Objective.DISTANCE


# ---------- walk legs


def test_walk_legs_bridge_snap_gaps():
    src = Location(23.79, 90.40)
    dst = Location(23.81, 90.44)
    it = assemble(FINE, src, dst, ALL_MODES, named_graph())
    first, last = it.segments[0], it.segments[-1]
    assert first == Segment(src, A, WALK, src.distance_km(A))
    assert last == Segment(E, dst, WALK, E.distance_km(dst))
    assert first.cost == last.cost == 0.0
    assert first.start_name == last.end_name == ""
    assert it.total == 85.0


def test_no_walk_leg_at_or_below_threshold():
    # 0.0005 km south of A: inside the threshold but a different grid cell
    src = Location(23.80 - 0.0005 / 111.195, 90.40)
    assert src != A
    assert 0 < src.distance_km(A) <= WALK_THRESHOLD_KM
    it = assemble(FINE, src, E, ALL_MODES, named_graph())
    assert [s.mode for s in it.segments] == [CAR, METRO]


def test_walk_leg_just_above_threshold():
    src = Location(23.80 - 0.002 / 111.195, 90.40)
    assert src.distance_km(A) > WALK_THRESHOLD_KM
    it = assemble(FINE, src, E, ALL_MODES, named_graph())
    assert it.segments[0].mode is WALK


# ---------- empty routes


def test_empty_route_between_distinct_points_has_no_segments():
    src, dst = Location(23.70, 90.30), Location(23.71, 90.30)
    for policy in (ALL_MODES, DISTANCE):
        it = assemble([], src, dst, policy, NetworkGraph(), status=SearchStatus.UNREACHABLE)
        assert it.segments == ()
        assert it.total == 0.0
        assert it.status is SearchStatus.UNREACHABLE
        assert not it.is_walk_only


def test_empty_route_same_point_has_no_segments():
    it = assemble([], A, A, DISTANCE, NetworkGraph())
    assert it.segments == ()
    assert it.total == 0.0
    assert it.status is SearchStatus.TRIVIAL
    assert not it.is_walk_only
