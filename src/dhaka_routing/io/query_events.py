# dhaka_routing/io/query_events.py

from dataclasses import dataclass


# Base type for analytics records emitted per query
@dataclass
class QueryEvent:
    run_id: str
    seq: int  # solver query sequence (for total ordering)
    name: str  # stable event name


@dataclass
class QuerySolved(QueryEvent):
    problem_id: int
    policy: str
    status: str
    source: tuple[float, float]  # (lat, lon) as queried
    destination: tuple[float, float]
    segments: int
    walk_km: float
    total: float
    objective: str
