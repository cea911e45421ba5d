"""Configuration: constants, enums, and dataclasses for the route optimizer."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import UnknownCriterion
from .utils import setup_logging

logger = setup_logging()


MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24

UNREACHABLE = float("inf")

DEFAULT_INPUT_FILE = "data/input_routes.xlsx"
DEFAULT_OUTPUT_FILE = "outputs/output_routes.xlsx"
DEFAULT_START_LOCATION = 1


class Criterion(str, Enum):
    PLAIN = "plain"
    COST = "cost"
    TIME = "time"

    @property
    def surcharge_factor(self) -> float:
        """Fraction of the edge weight added on top of it during relaxation."""
        return _SURCHARGE_FACTORS[self]

    @classmethod
    def parse(cls, value: Union["Criterion", str, None], strict: bool = False) -> "Criterion":
        """
        Resolve a criterion name.

        Names match exactly: "cost" and "time" only, so "COST" or "time "
        are unknown. Unknown names fall back to PLAIN unless strict is set.
        Callers that pass free-form criterion strings through without
        validating them rely on that fallback. None or blank is PLAIN.
        """
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return cls.PLAIN

        try:
            return cls(str(value))
        except ValueError:
            if strict:
                raise UnknownCriterion(value, [c.value for c in cls])
            logger.warning(f"Unknown criterion '{value}', using '{cls.PLAIN.value}'")
            return cls.PLAIN


_SURCHARGE_FACTORS = {
    Criterion.PLAIN: 0.0,
    Criterion.COST: 1.5,
    Criterion.TIME: 0.5,
}


class WindowMode(str, Enum):
    LITERAL = "literal"      # start hour only, minutes and end ignored
    CORRECTED = "corrected"  # window end as fractional hours


@dataclass(frozen=True)
class Location:
    location_id: int
    name: str


@dataclass(frozen=True)
class RawEdge:
    from_location: int
    to_location: int
    base_distance: float
    traffic_factor: float = 1.0


@dataclass
class RunSettings:
    start_location: int = DEFAULT_START_LOCATION
    criterion: Criterion = Criterion.PLAIN
    apply_traffic: bool = True
    window_mode: WindowMode = WindowMode.LITERAL
    strict_criterion: bool = False


def location_name(locations: dict[int, Location], location_id: int) -> Optional[str]:
    location = locations.get(location_id)
    return location.name if location else None
