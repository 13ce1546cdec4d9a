# io/kml.py
from pathlib import Path

from dhaka_routing.domain.entities.geography import Location
from dhaka_routing.domain.itinerary import Itinerary

_HEAD = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<kml xmlns="http://earth.google.com/kml/2.1">\n'
    "<Document><Placemark><name>route</name>\n"
    "<LineString><tessellate>1</tessellate>\n<coordinates>\n"
)
_TAIL = "</coordinates></LineString></Placemark></Document></kml>\n"


def trace(itinerary: Itinerary) -> list[Location]:
    """Segment start points followed by the final segment end."""
    pts = [s.start for s in itinerary.segments]
    if itinerary.segments:
        pts.append(itinerary.segments[-1].end)
    return pts


def itinerary_to_kml(itinerary: Itinerary) -> str:
    body = "".join(f"{p.lon:.6f},{p.lat:.6f},0\n" for p in trace(itinerary))
    return _HEAD + body + _TAIL


def write_kml(itinerary: Itinerary, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(itinerary_to_kml(itinerary), encoding="utf-8")
    return path
