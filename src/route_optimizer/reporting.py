"""Report generation for route optimizer outputs."""
import math

import pandas as pd

from .config import Location
from .engine import RouteResult
from .utils import setup_logging

logger = setup_logging()


class ReportBuilder:

    def __init__(
            self,
            locations: dict[int, Location],
            results: dict[str, RouteResult]
    ):
        self.locations = locations
        self.results = results

    def _name(self, location_id: int) -> str:
        location = self.locations.get(location_id)
        return location.name if location else ""

    def build_locations_df(self) -> pd.DataFrame:
        rows = [
            {"location_id": loc.location_id, "name": loc.name}
            for loc in sorted(self.locations.values(), key=lambda l: l.location_id)
        ]
        return pd.DataFrame(rows, columns=["location_id", "name"])

    def build_distances_df(self) -> pd.DataFrame:
        """
        One row per location per run.

        Unreachable locations get reachable=False and an empty distance,
        never a finite placeholder.
        """
        rows = []
        for run_name, result in self.results.items():
            location_ids = sorted(set(self.locations) | set(result.distances))
            for location_id in location_ids:
                distance = result.distances.get(location_id, math.inf)
                reachable = not math.isinf(distance)
                rows.append({
                    "run": run_name,
                    "criterion": result.criterion.value,
                    "windowed": result.windowed,
                    "start": result.start,
                    "location_id": location_id,
                    "name": self._name(location_id),
                    "distance": distance if reachable else None,
                    "reachable": reachable
                })

        df = pd.DataFrame(rows, columns=[
            "run", "criterion", "windowed", "start", "location_id", "name", "distance", "reachable"
        ])
        logger.info(f"Built distances with {len(df)} rows")
        return df

    def build_window_warnings_df(self) -> pd.DataFrame:
        rows = []
        for run_name, result in self.results.items():
            for warning in result.window_warnings:
                rows.append({
                    "run": run_name,
                    "location_id": warning.location_id,
                    "name": self._name(warning.location_id),
                    "window": warning.window,
                    "message": warning.message
                })

        return pd.DataFrame(rows, columns=["run", "location_id", "name", "window", "message"])

    def build_summary_df(self) -> pd.DataFrame:
        rows = []
        for run_name, result in self.results.items():
            reachable = result.reachable()
            others = {k: v for k, v in reachable.items() if k != result.start}
            rows.append({
                "run": run_name,
                "criterion": result.criterion.value,
                "windowed": result.windowed,
                "start": result.start,
                "start_name": self._name(result.start),
                "reachable_locations": len(reachable),
                "unreachable_locations": len(result.distances) - len(reachable),
                "max_distance": max(others.values()) if others else 0.0,
                "window_warnings": len(result.window_warnings)
            })

        return pd.DataFrame(rows)

    def build_all(self) -> dict[str, pd.DataFrame]:
        return {
            "summary": self.build_summary_df(),
            "distances": self.build_distances_df(),
            "window_warnings": self.build_window_warnings_df(),
            "locations": self.build_locations_df()
        }


def build_all_reports(
        locations: dict[int, Location],
        results: dict[str, RouteResult]
) -> dict[str, pd.DataFrame]:
    return ReportBuilder(locations, results).build_all()
