# dhaka_routing/domain/network.py
from collections.abc import Sequence

import numpy as np

from dhaka_routing.domain.entities.geography import Edge, Location, TransportMode
from dhaka_routing.domain.geodesy import haversine_km_many

# station_name() lookup order
STATION_TABLE_ORDER = (TransportMode.METRO, TransportMode.BUS_BIKOLPO, TransportMode.BUS_UTTARA)

_NO_EDGES: tuple[Edge, ...] = ()


class NetworkGraph:
    """
    Directed multi-modal network: adjacency keyed by origin Location, the set of
    known locations, and one station-name table per transit mode.

    Built once by the loader, then treated as read-only by search and assembly.
    """

    def __init__(self):
        self._adj: dict[Location, list[Edge]] = {}
        self._locations: set[Location] = set()
        self._stations: dict[TransportMode, dict[Location, str]] = {
            m: {} for m in STATION_TABLE_ORDER
        }
        # snapping cache: locations sorted by grid key plus their coordinate arrays
        self._snap_index: tuple[list[Location], np.ndarray, np.ndarray] | None = None

    # ------------- building -----------------------------

    def add_edge(self, edge: Edge) -> None:
        self._locations.add(edge.start)
        self._locations.add(edge.end)
        self._adj.setdefault(edge.start, []).append(edge)
        self._snap_index = None

    def add_station(self, mode: TransportMode, loc: Location, name: str) -> None:
        try:
            self._stations[mode][loc] = name
        except KeyError:
            raise ValueError(f"No station table for mode {mode.name}") from None

    def add_metro_station(self, loc: Location, name: str) -> None:
        self.add_station(TransportMode.METRO, loc, name)

    def add_bikolpo_stop(self, loc: Location, name: str) -> None:
        self.add_station(TransportMode.BUS_BIKOLPO, loc, name)

    def add_uttara_stop(self, loc: Location, name: str) -> None:
        self.add_station(TransportMode.BUS_UTTARA, loc, name)

    # ------------- queries ------------------------------

    def neighbors(self, loc: Location) -> Sequence[Edge]:
        return self._adj.get(loc, _NO_EDGES)

    def station_name(self, loc: Location) -> str:
        for mode in STATION_TABLE_ORDER:
            name = self._stations[mode].get(loc)
            if name is not None:
                return name
        return ""

    def nearest_location(self, target: Location) -> Location:
        """
        Snap `target` to the known location with the smallest great-circle distance.
        An empty graph returns `target` unchanged. Ties resolve to the first location
        in ascending grid-key order.
        """
        if not self._locations:
            return target
        locs, lats, lons = self._index()
        d = haversine_km_many(target.lat, target.lon, lats, lons)
        return locs[int(np.argmin(d))]

    def distance_to_nearest_location(self, target: Location) -> float:
        return target.distance_km(self.nearest_location(target))

    def _index(self) -> tuple[list[Location], np.ndarray, np.ndarray]:
        if self._snap_index is None:
            locs = sorted(self._locations)
            lats = np.fromiter((p.lat for p in locs), dtype=float, count=len(locs))
            lons = np.fromiter((p.lon for p in locs), dtype=float, count=len(locs))
            self._snap_index = (locs, lats, lons)
        return self._snap_index

    # ------------- diagnostics --------------------------

    @property
    def is_empty(self) -> bool:
        return not self._locations

    def location_count(self) -> int:
        return len(self._locations)

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adj.values())

    def station_count(self) -> int:
        return sum(len(table) for table in self._stations.values())

    def __contains__(self, loc: Location) -> bool:
        return loc in self._locations
