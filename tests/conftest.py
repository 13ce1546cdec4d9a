# tests/conftest.py
import pytest

from dhaka_routing.domain.entities.geography import Edge, Location, TransportMode
from dhaka_routing.domain.network import NetworkGraph

CAR, METRO = TransportMode.CAR, TransportMode.METRO
BIKOLPO, UTTARA = TransportMode.BUS_BIKOLPO, TransportMode.BUS_UTTARA


def link(g: NetworkGraph, a: Location, b: Location, km: float, mode: TransportMode) -> None:
    """Bidirectional edge pair, as the loader builds them."""
    g.add_edge(Edge(a, b, km, mode))
    g.add_edge(Edge(b, a, km, mode))


@pytest.fixture
def pq_graph():
    """P(0,0) -- 10 km CAR -- Q(0,1)."""
    g = NetworkGraph()
    p, q = Location(0.0, 0.0), Location(0.0, 1.0)
    link(g, p, q, 10.0, CAR)
    return g, p, q


@pytest.fixture
def city_graph():
    """
    Small Dhaka-like network:

        A --car 4-- B --car 4-- C          (car only: 8 km, Tk160)
        A --metro 3-- M --metro 3-- C      (metro: 6 km, Tk30)
        B --bikolpo 1-- X --bikolpo 1-- C  (bus from B)
    """
    g = NetworkGraph()
    pts = {
        "A": Location(23.80, 90.40),
        "B": Location(23.80, 90.42),
        "C": Location(23.80, 90.44),
        "M": Location(23.79, 90.42),
        "X": Location(23.81, 90.43),
    }
    link(g, pts["A"], pts["B"], 4.0, CAR)
    link(g, pts["B"], pts["C"], 4.0, CAR)
    link(g, pts["A"], pts["M"], 3.0, METRO)
    link(g, pts["M"], pts["C"], 3.0, METRO)
    link(g, pts["B"], pts["X"], 1.0, BIKOLPO)
    link(g, pts["X"], pts["C"], 1.0, BIKOLPO)
    g.add_metro_station(pts["A"], "Agargaon")
    g.add_metro_station(pts["M"], "Farmgate")
    g.add_metro_station(pts["C"], "Motijheel")
    g.add_bikolpo_stop(pts["B"], "Mohakhali")
    return g, pts


@pytest.fixture
def data_dir(tmp_path):
    """The four route CSVs in the loader's format (lon, lat pairs)."""
    d = tmp_path / "data"
    d.mkdir()
    (d / "Roadmap-Dhaka.csv").write_text(
        "road1,90.40,23.80,90.42,23.80,primary,4.0\n"
        "road2,90.42,23.80,90.43,23.80,90.44,23.80,primary,4.0\n"
        "\n"
        "short,1\n"
        "nocoords,abc,def,primary,1.0\n"
        "badtotal,90.50,23.90,90.51,23.90,primary,n/a\n"
    )
    (d / "Routemap-DhakaMetroRail.csv").write_text(
        "metro1,90.40,23.80,90.42,23.79,90.44,23.80,Agargaon,Motijheel\n"
        "tooshort,90.40,23.80\n"
    )
    (d / "Routemap-BikolpoBus.csv").write_text("bus1,90.42,23.80,90.43,23.81,Mohakhali,Gulshan\n")
    (d / "Routemap-UttaraBus.csv").write_text(
        "utt1,90.44,23.80,90.45,23.82,Motijheel Bus Stand,Uttara\r\n"
    )
    return d
