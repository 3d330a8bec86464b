"""Small pure helpers shared by the adapters and the renderer."""

from __future__ import annotations

from .markup import escape_markup
from .timefmt import (
    clock_to_minutes,
    current_date_in_zone,
    format_clock_in_zone,
    minute_of_day,
    minutes_to_clock,
    parse_calendar_date,
    parse_clock_time,
    parse_instant,
    resolve_zone,
    utc_day_window,
)

__all__ = [
    "clock_to_minutes",
    "current_date_in_zone",
    "escape_markup",
    "format_clock_in_zone",
    "minute_of_day",
    "minutes_to_clock",
    "parse_calendar_date",
    "parse_clock_time",
    "parse_instant",
    "resolve_zone",
    "utc_day_window",
]
