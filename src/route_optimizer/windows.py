"""
Delivery window parsing: turn "HH:MM-HH:MM" strings into numeric cutoffs.

Two modes are supported:

LITERAL (default) keeps the long-standing behaviour: the first two characters
of the window start are read as the hour and returned as the cutoff.
"09:30-12:00" gives 9.0. Minutes and the window end are ignored.

CORRECTED reads both ends strictly and returns the window end in fractional
hours, the latest acceptable arrival. "09:30-12:45" gives 12.75. A window
whose end is before its start crosses midnight and its end is moved to the
next day ("22:00-02:00" gives 26.0).
"""
import re
import string
from typing import Union

from .config import HOURS_PER_DAY, MINUTES_PER_HOUR, WindowMode
from .errors import InvalidWindowFormat

WINDOW_SEPARATOR = "-"

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_window_cutoff(window: str, mode: Union[WindowMode, str] = WindowMode.LITERAL) -> float:
    """Parse a delivery window into its cutoff. Raises InvalidWindowFormat."""
    mode = WindowMode(mode)

    if not isinstance(window, str):
        raise InvalidWindowFormat(window, "window must be a string")

    if mode == WindowMode.CORRECTED:
        return _parse_window_end_hours(window)
    return float(_parse_start_hour(window))


def _parse_start_hour(window: str) -> int:
    if WINDOW_SEPARATOR not in window:
        raise InvalidWindowFormat(window, f"missing '{WINDOW_SEPARATOR}' separator")

    start = window.split(WINDOW_SEPARATOR)[0]
    if len(start) < 2:
        raise InvalidWindowFormat(window, "window start is shorter than two characters")

    hour_text = start[:2]
    if not all(ch in string.digits for ch in hour_text):
        raise InvalidWindowFormat(window, f"window start hour {hour_text!r} is not numeric")

    return int(hour_text)


def _parse_window_end_hours(window: str) -> float:
    parts = window.split(WINDOW_SEPARATOR)
    if len(parts) != 2:
        raise InvalidWindowFormat(window, "expected exactly one 'HH:MM-HH:MM' range")

    start_mins = _clock_to_minutes(window, parts[0])
    end_mins = _clock_to_minutes(window, parts[1])

    if end_mins < start_mins:
        end_mins += HOURS_PER_DAY * MINUTES_PER_HOUR

    return end_mins / MINUTES_PER_HOUR


def _clock_to_minutes(window: str, text: str) -> int:
    match = _CLOCK_PATTERN.match(text.strip())
    if not match:
        raise InvalidWindowFormat(window, f"{text.strip()!r} is not HH:MM")

    hour = int(match.group(1))
    minute = int(match.group(2))

    if minute >= MINUTES_PER_HOUR:
        raise InvalidWindowFormat(window, f"minute out of range in {text.strip()!r}")
    if hour > HOURS_PER_DAY or (hour == HOURS_PER_DAY and minute > 0):
        raise InvalidWindowFormat(window, f"hour out of range in {text.strip()!r}")

    return hour * MINUTES_PER_HOUR + minute
