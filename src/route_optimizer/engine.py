"""
Shortest path engine: single-source Dijkstra over the location graph.

One traversal serves both the criterion-weighted search and the delivery
window search. Windows are applied through an optional constraint object
consulted before each relaxation.
"""
import heapq
import math
from dataclasses import dataclass, field
from typing import Optional, Union

from .config import Criterion, WindowMode, UNREACHABLE
from .cost_policy import relaxation_cost
from .errors import InvalidWindowFormat
from .graph import LocationGraph
from .utils import setup_logging
from .windows import parse_window_cutoff

logger = setup_logging()


@dataclass
class WindowWarning:
    location_id: int
    window: str
    message: str


@dataclass
class RouteResult:
    start: int
    criterion: Criterion
    distances: dict[int, float]
    windowed: bool = False
    window_warnings: list[WindowWarning] = field(default_factory=list)

    def reachable(self) -> dict[int, float]:
        """Distances with unreachable locations left out."""
        return {
            location_id: distance
            for location_id, distance in self.distances.items()
            if not math.isinf(distance)
        }

    def is_reachable(self, location_id: int) -> bool:
        return not math.isinf(self.distances.get(location_id, UNREACHABLE))


class WindowConstraint:
    """
    Delivery window gate for a single run.

    A relaxation into a windowed location is allowed only if the candidate
    distance does not exceed the window's cutoff. A window that cannot be
    parsed imposes no constraint and is reported once as a WindowWarning.
    """

    def __init__(self, delivery_windows: dict[int, str], mode: WindowMode = WindowMode.LITERAL):
        self.delivery_windows = dict(delivery_windows)
        self.mode = WindowMode(mode)
        self.warnings: list[WindowWarning] = []
        self._cutoffs: dict[int, Optional[float]] = {}

    def cutoff_for(self, location_id: int) -> Optional[float]:
        if location_id not in self._cutoffs:
            self._cutoffs[location_id] = self._parse_cutoff(location_id)
        return self._cutoffs[location_id]

    def _parse_cutoff(self, location_id: int) -> Optional[float]:
        window = self.delivery_windows.get(location_id)
        if window is None:
            return None

        try:
            return parse_window_cutoff(window, self.mode)
        except InvalidWindowFormat as e:
            self.warnings.append(WindowWarning(
                location_id=location_id,
                window=str(window),
                message=str(e)
            ))
            logger.warning(f"Ignoring delivery window for location {location_id}: {e}")
            return None

    def allows(self, location_id: int, candidate: float) -> bool:
        cutoff = self.cutoff_for(location_id)
        return cutoff is None or candidate <= cutoff


class ShortestPathEngine:

    def __init__(self, graph: LocationGraph):
        self.graph = graph

    def run(
            self,
            start: int,
            criterion: Union[Criterion, str, None] = Criterion.PLAIN,
            delivery_windows: Optional[dict[int, str]] = None,
            window_mode: Union[WindowMode, str] = WindowMode.LITERAL
    ) -> RouteResult:
        """
        Compute distances from start to every location in the graph.

        If delivery_windows is given, relaxations that would reach a windowed
        location later than its cutoff are skipped; such a location stays
        unreachable when no path meets its window.
        """
        criterion = Criterion.parse(criterion)
        constraint = None
        if delivery_windows is not None:
            constraint = WindowConstraint(delivery_windows, window_mode)

        if start not in self.graph:
            logger.warning(f"Start location {start} has no edges; only the start is reachable")

        distances = self._search(start, criterion, constraint)

        result = RouteResult(
            start=start,
            criterion=criterion,
            distances=distances,
            windowed=constraint is not None,
            window_warnings=constraint.warnings if constraint else []
        )

        logger.debug(
            f"Run from {start} ({criterion.value}{', windowed' if result.windowed else ''}): "
            f"{len(result.reachable())}/{len(distances)} locations reachable"
        )
        return result

    def _search(
            self,
            start: int,
            criterion: Criterion,
            constraint: Optional[WindowConstraint]
    ) -> dict[int, float]:
        distances = {location_id: UNREACHABLE for location_id in self.graph.locations()}
        distances[start] = 0.0

        frontier = [(0.0, start)]

        while frontier:
            distance, location_id = heapq.heappop(frontier)

            # Stale entry: a shorter distance was already settled
            if distance > distances[location_id]:
                continue

            for neighbor, weight in self.graph.neighbors(location_id):
                candidate = distance + relaxation_cost(criterion, weight)

                if constraint is not None and not constraint.allows(neighbor, candidate):
                    continue

                if candidate < distances[neighbor]:
                    distances[neighbor] = candidate
                    heapq.heappush(frontier, (candidate, neighbor))

        return distances


def shortest_distances(
        graph: LocationGraph,
        start: int,
        criterion: Union[Criterion, str, None] = Criterion.PLAIN
) -> RouteResult:
    return ShortestPathEngine(graph).run(start, criterion)


def window_constrained_distances(
        graph: LocationGraph,
        start: int,
        delivery_windows: dict[int, str],
        window_mode: Union[WindowMode, str] = WindowMode.LITERAL,
        criterion: Union[Criterion, str, None] = Criterion.PLAIN
) -> RouteResult:
    return ShortestPathEngine(graph).run(start, criterion, delivery_windows, window_mode)
