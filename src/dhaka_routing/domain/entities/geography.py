from dataclasses import dataclass, field
from enum import Enum

from dhaka_routing.domain.geodesy import haversine_km

# Locations are keyed on a 1e-6 degree grid (~0.1 m); parsing noise below that
# collapses onto the same node.
GRID_SCALE = 1_000_000


class TransportMode(Enum):
    WALK = "walk"
    CAR = "car"
    METRO = "metro"
    BUS_BIKOLPO = "bus_bikolpo"
    BUS_UTTARA = "bus_uttara"

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]


_MODE_LABELS = {
    TransportMode.WALK: "Walk",
    TransportMode.CAR: "Car",
    TransportMode.METRO: "Metro",
    TransportMode.BUS_BIKOLPO: "Bikolpo Bus",
    TransportMode.BUS_UTTARA: "Uttara Bus",
}


# Core geometry types used by the routing engine
@dataclass(frozen=True, order=True)
class Location:
    key: tuple[int, int] = field(init=False, repr=False)
    lat: float = field(compare=False)
    lon: float = field(compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "key", (round(self.lat * GRID_SCALE), round(self.lon * GRID_SCALE))
        )

    def distance_km(self, other: "Location") -> float:
        return haversine_km(self.lat, self.lon, other.lat, other.lon)

    def __str__(self) -> str:
        return f"({self.lon:.6f},{self.lat:.6f})"


@dataclass(frozen=True)
class Edge:
    start: Location
    end: Location
    distance_km: float
    mode: TransportMode
    name: str = ""
