"""Shared utility functions for the route optimizer."""
import logging
import math
import sys
from typing import Optional

import pandas as pd


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure and return logger that writes to stdout."""
    logger = logging.getLogger("route_optimizer")

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


def is_blank(val) -> bool:
    if val is None:
        return True
    if isinstance(val, str):
        return not val.strip()
    return bool(pd.isna(val))


def parse_bool_value(val, default: bool = False) -> bool:
    """Parse a boolean cell from a workbook (1/0, true/false, yes/no)."""
    if is_blank(val):
        return default
    if isinstance(val, bool):
        return val
    if isinstance(val, (int, float)):
        return bool(int(val))

    text = str(val).strip().lower()
    if text in ("1", "true", "yes", "y", "on"):
        return True
    if text in ("0", "false", "no", "n", "off"):
        return False
    raise ValueError(f"Cannot parse boolean value: {val}")


def parse_int_value(val) -> Optional[int]:
    """Parse an integer id cell; floats like 3.0 from Excel are accepted."""
    if is_blank(val):
        return None
    number = float(val)
    if not number.is_integer():
        raise ValueError(f"Expected an integer id, got {val}")
    return int(number)


def format_distance(distance: float) -> str:
    """Format a distance for display: unreachable entries never print as numbers."""
    if math.isinf(distance):
        return "unreachable"
    return f"{distance:,.2f}"
