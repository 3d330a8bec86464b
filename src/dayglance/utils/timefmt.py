"""Conversions between calendar dates, clock times, instants and timezones."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..domain.errors import ClientInputError
from ..domain.models import clock_to_minutes as clock_to_minutes

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_CLOCK_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")
_FRACTION_RE = re.compile(r"\.([0-9]+)")


def parse_calendar_date(text: Optional[str]) -> Optional[str]:
    """Return ``text`` if it is a strict ``YYYY-MM-DD`` date, else ``None``.

    Only the month (1-12) and day (1-31) ranges are checked; ``2024-02-31``
    passes here.
    """

    if not text:
        return None
    match = _DATE_RE.fullmatch(text)
    if not match:
        return None
    month = int(match.group(2))
    day = int(match.group(3))
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return text


def current_date_in_zone(now: datetime, tz: tzinfo) -> str:
    return now.astimezone(tz).strftime("%Y-%m-%d")


def parse_clock_time(text: Optional[str]) -> Optional[int]:
    """Parse ``H:MM`` / ``HH:MM`` into minutes after midnight."""

    if text is None:
        return None
    match = _CLOCK_RE.fullmatch(text)
    if not match:
        return None
    hours = int(match.group(1))
    minutes = int(match.group(2))
    if not 0 <= hours <= 23 or not 0 <= minutes <= 59:
        return None
    return hours * 60 + minutes


def minutes_to_clock(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def resolve_zone(name: Optional[str]) -> tzinfo:
    """Resolve an IANA zone name; ``UTC`` in any case maps to ``timezone.utc``."""

    cleaned = (name or "UTC").strip()
    if cleaned.upper() in {"UTC", "Z", "GMT"}:
        return timezone.utc
    try:
        return ZoneInfo(cleaned)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ClientInputError(f"Unknown timezone: {cleaned}") from exc


def format_clock_in_zone(instant: datetime, tz: tzinfo) -> str:
    """Wall-clock ``HH:MM`` of ``instant`` as observed in ``tz``."""

    return instant.astimezone(tz).strftime("%H:%M")


def _six_digit_fraction(match: re.Match) -> str:
    # Postgres drops trailing zeros; fromisoformat on 3.10 wants 3 or 6 digits.
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_instant(value: Any) -> datetime:
    """Parse a stored timestamp into an aware datetime; naive values are UTC."""

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = _FRACTION_RE.sub(_six_digit_fraction, value.strip().replace("Z", "+00:00"), count=1)
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported timestamp value: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_day_window(date_ymd: str) -> tuple[datetime, datetime]:
    """Half-open ``[00:00Z, 00:00Z + 24h)`` for a calendar date."""

    try:
        start = datetime.strptime(date_ymd, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError as exc:
        raise ClientInputError(f"Invalid date format: {date_ymd}") from exc
    return start, start + timedelta(days=1)


def minute_of_day(instant: datetime, tz: tzinfo) -> int:
    local = instant.astimezone(tz)
    return local.hour * 60 + local.minute
