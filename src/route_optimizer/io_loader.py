"""
Load locations, paths, delivery windows and run settings.

Input is either an Excel workbook with one sheet per table, or a directory
holding one CSV file per table (locations.csv, paths.csv, ...). The loader
only hands plain records to the rest of the package; nothing downstream
touches the file.
"""
from pathlib import Path
from typing import Optional

import pandas as pd

from .config import (
    Location, RawEdge, RunSettings, Criterion, WindowMode, DEFAULT_START_LOCATION
)
from .utils import is_blank, parse_bool_value, parse_int_value, setup_logging

logger = setup_logging()


class InputLoader:

    REQUIRED_SHEETS = [
        "locations",
        "paths",
    ]

    OPTIONAL_SHEETS = [
        "delivery_windows",
        "run_settings",
    ]

    REQUIRED_COLUMNS = {
        "locations": ["location_id", "name"],
        "paths": ["from_location", "to_location", "distance"],
        "delivery_windows": ["location_id", "window"],
        "run_settings": ["key", "value"],
    }

    def __init__(self, filepath: str, strict_criterion: bool = False):
        self.filepath = Path(filepath)
        self.strict_criterion = strict_criterion
        if not self.filepath.exists():
            raise FileNotFoundError(f"Input file not found: {filepath}")

        if self.filepath.is_dir():
            self.excel = None
            self.sheet_names = [p.stem for p in self.filepath.glob("*.csv")]
        else:
            self.excel = pd.ExcelFile(filepath)
            self.sheet_names = list(self.excel.sheet_names)

        self._validate_required_sheets()

    def _validate_required_sheets(self):
        missing = [s for s in self.REQUIRED_SHEETS if s not in self.sheet_names]
        if missing:
            raise ValueError(f"Missing required sheets: {missing}")

    def _read_sheet(self, sheet_name: str) -> Optional[pd.DataFrame]:
        if sheet_name not in self.sheet_names:
            return None

        if self.excel is not None:
            df = pd.read_excel(self.excel, sheet_name=sheet_name)
        else:
            df = pd.read_csv(self.filepath / f"{sheet_name}.csv")

        df.columns = [str(c).strip().lower() for c in df.columns]
        missing = [c for c in self.REQUIRED_COLUMNS[sheet_name] if c not in df.columns]
        if missing:
            raise ValueError(f"Sheet '{sheet_name}' missing required columns: {missing}")

        return df

    def load_locations(self) -> dict[int, Location]:
        df = self._read_sheet("locations")

        locations = {}
        for _, row in df.iterrows():
            location_id = parse_int_value(row["location_id"])
            if location_id is None:
                raise ValueError(f"Location row missing location_id: {row.to_dict()}")
            if location_id in locations:
                raise ValueError(f"Duplicate location_id: {location_id}")

            name = "" if is_blank(row["name"]) else str(row["name"]).strip()
            locations[location_id] = Location(location_id=location_id, name=name)

        logger.info(f"Loaded {len(locations)} locations")
        return locations

    def load_edges(self) -> list[RawEdge]:
        df = self._read_sheet("paths")

        edges = []
        for _, row in df.iterrows():
            from_location = parse_int_value(row["from_location"])
            to_location = parse_int_value(row["to_location"])
            if from_location is None or to_location is None:
                raise ValueError(f"Path row missing endpoint: {row.to_dict()}")

            traffic_factor = row.get("traffic_factor")
            edge = RawEdge(
                from_location=from_location,
                to_location=to_location,
                base_distance=float(row["distance"]),
                traffic_factor=1.0 if is_blank(traffic_factor) else float(traffic_factor)
            )
            edges.append(edge)

        logger.info(f"Loaded {len(edges)} paths")
        return edges

    def load_delivery_windows(self) -> dict[int, str]:
        df = self._read_sheet("delivery_windows")
        if df is None:
            logger.info("No delivery_windows sheet found, window-constrained run will be skipped")
            return {}

        windows = {}
        for _, row in df.iterrows():
            location_id = parse_int_value(row["location_id"])
            if location_id is None or is_blank(row["window"]):
                continue
            windows[location_id] = str(row["window"]).strip()

        logger.info(f"Loaded {len(windows)} delivery windows")
        return windows

    def load_run_settings(self) -> RunSettings:
        df = self._read_sheet("run_settings")

        settings = {}
        if df is not None:
            for _, row in df.iterrows():
                key = str(row["key"]).strip()
                settings[key] = row["value"]

        strict = self.strict_criterion or parse_bool_value(settings.get("strict_criterion"), default=False)
        criterion = Criterion.parse(
            None if is_blank(settings.get("criterion")) else str(settings["criterion"]),
            strict=strict
        )

        window_mode_val = settings.get("window_mode")
        window_mode_str = (
            WindowMode.LITERAL.value if is_blank(window_mode_val) else str(window_mode_val).lower().strip()
        )
        try:
            window_mode = WindowMode(window_mode_str)
        except ValueError:
            raise ValueError(
                f"Invalid window_mode: {window_mode_str}. "
                f"Must be one of {[e.value for e in WindowMode]}"
            )

        start_location = parse_int_value(settings.get("start_location"))

        run_settings = RunSettings(
            start_location=DEFAULT_START_LOCATION if start_location is None else start_location,
            criterion=criterion,
            apply_traffic=parse_bool_value(settings.get("apply_traffic"), default=True),
            window_mode=window_mode,
            strict_criterion=strict
        )

        logger.info(f"Loaded run settings: {run_settings}")
        return run_settings

    def load_all(self) -> dict:
        return {
            "locations": self.load_locations(),
            "edges": self.load_edges(),
            "delivery_windows": self.load_delivery_windows(),
            "run_settings": self.load_run_settings()
        }
