# io/report.py
from dhaka_routing.domain.entities.geography import Location
from dhaka_routing.domain.itinerary import Itinerary


def separator(c: str = "=", width: int = 80) -> str:
    return c * width


def _place(name: str, loc: Location) -> str:
    return f"{name} {loc}" if name else str(loc)


def format_itinerary(
    problem_id: int,
    itinerary: Itinerary,
    source: Location,
    destination: Location,
    *,
    show_cost: bool,
) -> str:
    lines = [
        f"Problem {problem_id}",
        f"Source: {source}",
        f"Destination: {destination}",
        "",
    ]
    for i, seg in enumerate(itinerary.segments, start=1):
        lines.append(
            f"Segment {i}: {seg.mode.label} from {_place(seg.start_name, seg.start)}"
            f" to {_place(seg.end_name, seg.end)}"
        )
        detail = f"           Distance: {seg.distance_km:.2f} km"
        if show_cost:
            detail += f", Cost: Tk{seg.cost:.2f}"
        lines.append(detail)
    lines.append("")
    if show_cost:
        lines.append(f"Total Cost: Tk{itinerary.total:.2f}")
    else:
        lines.append(f"Total Distance: {itinerary.total:.2f} km")
    return "\n".join(lines)
