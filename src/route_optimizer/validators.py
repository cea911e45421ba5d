"""
Input validation functions.
"""
import math

from .config import Location, RawEdge, RunSettings
from .errors import InvalidWindowFormat, RouteOptimizerError
from .utils import setup_logging
from .windows import parse_window_cutoff

logger = setup_logging()


class ValidationError(RouteOptimizerError):
    """Custom exception for validation errors."""
    pass


class InputValidator:
    """Validate loaded input data for consistency and completeness."""

    def __init__(self, data: dict):
        self.data = data
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def validate_all(self) -> tuple[list[str], list[str]]:
        """Run all validations and return (errors, warnings)."""
        self.validate_locations()
        self.validate_edges()
        self.validate_delivery_windows()
        self.validate_run_settings()

        return self.errors, self.warnings

    def validate_locations(self):
        locations: dict[int, Location] = self.data["locations"]

        if not locations:
            self.errors.append("No locations defined")
            return

        for location_id, location in locations.items():
            if location.location_id != location_id:
                self.errors.append(
                    f"Location keyed as {location_id} has location_id {location.location_id}"
                )
            if not location.name or not location.name.strip():
                self.warnings.append(f"Location {location_id} has no name")

    def validate_edges(self):
        """Check edge endpoints exist and distances/factors are usable."""
        locations: dict[int, Location] = self.data["locations"]
        edges: list[RawEdge] = self.data["edges"]

        if not edges:
            self.warnings.append("No paths defined; every location except the start is unreachable")

        for i, edge in enumerate(edges):
            label = f"Path {i + 1} ({edge.from_location}->{edge.to_location})"

            if edge.from_location not in locations:
                self.errors.append(f"{label} references unknown from_location: {edge.from_location}")
            if edge.to_location not in locations:
                self.errors.append(f"{label} references unknown to_location: {edge.to_location}")

            if not math.isfinite(edge.base_distance):
                self.errors.append(f"{label} has non-finite distance: {edge.base_distance}")
            elif edge.base_distance < 0:
                self.errors.append(f"{label} has negative distance: {edge.base_distance}")

            if not math.isfinite(edge.traffic_factor):
                self.errors.append(f"{label} has non-finite traffic_factor: {edge.traffic_factor}")
            elif edge.traffic_factor < 0:
                self.errors.append(f"{label} has negative traffic_factor: {edge.traffic_factor}")
            elif edge.traffic_factor < 1.0:
                self.warnings.append(f"{label} has traffic_factor < 1.0: {edge.traffic_factor}")

            if edge.from_location == edge.to_location:
                self.warnings.append(f"{label} is a self loop")

    def validate_delivery_windows(self):
        """Windows on unknown or unparsable entries are ignored at run time, so only warn."""
        locations: dict[int, Location] = self.data["locations"]
        windows: dict[int, str] = self.data.get("delivery_windows") or {}
        settings: RunSettings = self.data["run_settings"]

        for location_id, window in windows.items():
            if location_id not in locations:
                self.warnings.append(f"Delivery window references unknown location: {location_id}")

            try:
                parse_window_cutoff(window, settings.window_mode)
            except InvalidWindowFormat as e:
                self.warnings.append(f"Location {location_id}: {e}; window will be ignored")

    def validate_run_settings(self):
        locations: dict[int, Location] = self.data["locations"]
        settings: RunSettings = self.data["run_settings"]

        if settings.start_location not in locations:
            self.warnings.append(
                f"Start location {settings.start_location} is not a known location; "
                f"only the start will be reachable"
            )


def validate_inputs(data: dict) -> None:
    """
    Validate all inputs and raise ValidationError if critical errors found.

    Warnings are logged but don't stop execution.
    """
    validator = InputValidator(data)
    errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"Validation warning: {warning}")

    if errors:
        for error in errors:
            logger.error(f"Validation error: {error}")
        raise ValidationError(f"Input validation failed with {len(errors)} error(s). See log for details.")

    logger.info("Input validation passed")
