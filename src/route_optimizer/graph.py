"""Location graph: undirected adjacency lists with traffic-adjusted edge weights."""
import math
from collections import Counter
from typing import Iterable, Optional

from .config import Location, RawEdge
from .errors import InvalidEdgeWeight
from .utils import setup_logging

logger = setup_logging()


def effective_weight(base_distance: float, traffic_factor: float, apply_traffic: bool) -> float:
    """Edge weight after the optional traffic multiplier."""
    if apply_traffic:
        return base_distance * traffic_factor
    return base_distance


class LocationGraph:
    """
    Undirected, weighted graph keyed by location id.

    Each edge is stored twice, once per direction, with the same weight.
    Parallel edges between the same pair are kept. The graph is built once
    and only read afterwards, so a single instance can back any number of
    engine runs.
    """

    def __init__(self):
        self._adjacency: dict[int, list[tuple[int, float]]] = {}

    def add_location(self, location_id: int) -> None:
        self._adjacency.setdefault(location_id, [])

    def add_edge(self, from_location: int, to_location: int, weight: float, edge=None) -> None:
        """Insert both directions. edge labels the InvalidEdgeWeight error when given."""
        if not math.isfinite(weight) or weight < 0:
            raise InvalidEdgeWeight(edge if edge is not None else (from_location, to_location), weight)

        self.add_location(from_location)
        self.add_location(to_location)
        self._adjacency[from_location].append((to_location, weight))
        self._adjacency[to_location].append((from_location, weight))

    def neighbors(self, location_id: int) -> tuple[tuple[int, float], ...]:
        return tuple(self._adjacency.get(location_id, ()))

    def locations(self) -> list[int]:
        return list(self._adjacency)

    def edge_count(self) -> int:
        """Number of undirected edges (each stored as two adjacency entries)."""
        return sum(len(entries) for entries in self._adjacency.values()) // 2

    def is_symmetric(self) -> bool:
        forward = Counter()
        backward = Counter()
        for location_id, entries in self._adjacency.items():
            for neighbor, weight in entries:
                forward[(location_id, neighbor, weight)] += 1
                backward[(neighbor, location_id, weight)] += 1
        return forward == backward

    def __contains__(self, location_id) -> bool:
        return location_id in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def __repr__(self) -> str:
        return f"LocationGraph(locations={len(self)}, edges={self.edge_count()})"


def build_graph(
        edges: Iterable[RawEdge],
        apply_traffic: bool = True,
        locations: Optional[Iterable[Location]] = None
) -> LocationGraph:
    """
    Build the undirected graph from raw edge rows.

    The traffic adjustment is computed once per row and shared by both
    directions. Raises InvalidEdgeWeight on a negative or non-finite weight.
    """
    graph = LocationGraph()

    if locations is not None:
        for location in locations:
            graph.add_location(location.location_id)

    for edge in edges:
        weight = effective_weight(edge.base_distance, edge.traffic_factor, apply_traffic)
        graph.add_edge(edge.from_location, edge.to_location, weight, edge=edge)

    logger.info(
        f"Built graph: {len(graph)} locations, {graph.edge_count()} edges "
        f"(traffic {'on' if apply_traffic else 'off'})"
    )
    return graph
