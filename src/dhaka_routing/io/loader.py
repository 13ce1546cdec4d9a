# dhaka_routing/io/loader.py
"""
Build a NetworkGraph from the Dhaka route CSVs.

Every line is `label, lon, lat, lon, lat, ..., <a>, <b>`. For the road map the
last token is the total length in km; for transit routes the last two tokens
are the start and end station names. Parsing is tolerant: malformed lines are
skipped and a missing file is logged and skipped.
"""

import logging
import math
from pathlib import Path

from dhaka_routing.config.models import NetworkFilesModel
from dhaka_routing.domain.entities.geography import Edge, Location, TransportMode
from dhaka_routing.domain.network import NetworkGraph

log = logging.getLogger(__name__)


def parse_line(line: str) -> list[str]:
    return line.rstrip("\r\n").split(",")


def parse_coords(tokens: list[str]) -> list[Location]:
    """
    Read lon/lat pairs from index 1, leaving the two trailing tokens.
    Stops at the first bad pair; `nan` and `inf` count as bad.
    """
    coords: list[Location] = []
    i = 1
    while i + 1 < len(tokens) - 2:
        try:
            lon, lat = float(tokens[i]), float(tokens[i + 1])
        except ValueError:
            break
        if not (math.isfinite(lon) and math.isfinite(lat)):
            break
        coords.append(Location(lat, lon))
        i += 2
    return coords


def _lines(path: Path):
    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    yield parse_line(line)
    except OSError as exc:
        log.error("cannot open %s: %s", path, exc)


def parse_roadmap(path: str | Path, graph: NetworkGraph) -> int:
    """Load road polylines as bidirectional CAR edges. Returns the number of edges added."""
    n = 0
    for tokens in _lines(Path(path)):
        if len(tokens) < 3:
            continue
        coords = parse_coords(tokens)
        if len(coords) < 2:
            continue
        try:
            total_km = float(tokens[-1])
        except ValueError:
            continue
        # the polyline length is spread evenly over its pieces
        piece = total_km / (len(coords) - 1)
        for a, b in zip(coords, coords[1:]):
            graph.add_edge(Edge(a, b, piece, TransportMode.CAR))
            graph.add_edge(Edge(b, a, piece, TransportMode.CAR))
            n += 2
    log.info("%d road segments loaded", n, extra={"extra": {"file": str(path), "edges": n}})
    return n


def parse_transit_route(path: str | Path, graph: NetworkGraph, mode: TransportMode) -> int:
    """Load a transit route file; endpoints of each line are registered as named stations."""
    n = stations = 0
    for tokens in _lines(Path(path)):
        if len(tokens) < 4:
            continue
        coords = parse_coords(tokens)
        if len(coords) < 2:
            continue
        start_name, end_name = tokens[-2].strip(), tokens[-1].strip()
        graph.add_station(mode, coords[0], start_name)
        graph.add_station(mode, coords[-1], end_name)
        stations += 2
        for a, b in zip(coords, coords[1:]):
            d = a.distance_km(b)
            graph.add_edge(Edge(a, b, d, mode))
            graph.add_edge(Edge(b, a, d, mode))
            n += 2
    log.info(
        "%d %s segments loaded",
        n,
        mode.label,
        extra={"extra": {"file": str(path), "edges": n, "stations": stations}},
    )
    return n


def build_network(files: NetworkFilesModel, graph: NetworkGraph | None = None) -> NetworkGraph:
    graph = graph if graph is not None else NetworkGraph()
    parse_roadmap(files.path("roadmap"), graph)
    parse_transit_route(files.path("metro"), graph, TransportMode.METRO)
    parse_transit_route(files.path("bikolpo"), graph, TransportMode.BUS_BIKOLPO)
    parse_transit_route(files.path("uttara"), graph, TransportMode.BUS_UTTARA)
    log.info(
        "graph loaded",
        extra={
            "extra": {
                "locations": graph.location_count(),
                "edges": graph.edge_count(),
                "stations": graph.station_count(),
            }
        },
    )
    return graph
