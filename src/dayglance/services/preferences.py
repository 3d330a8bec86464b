from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..data.repositories import PreferenceRepository
from ..domain import ClientInputError, TimetablePreferences, VisibleWindow
from ..utils.timefmt import parse_clock_time

logger = logging.getLogger(__name__)

DEFAULT_START_HOUR = 8
DEFAULT_END_HOUR = 18


def _override_minutes(value: Optional[str], fallback: int) -> int:
    if value is None or value == "":
        return fallback
    minutes = parse_clock_time(value)
    if minutes is None:
        raise ClientInputError("Invalid start or end. Use HH:MM (e.g., 07:00).")
    return minutes


def resolve_window(
    preferences: Optional[TimetablePreferences],
    start_override: Optional[str] = None,
    end_override: Optional[str] = None,
    *,
    default_start_hour: int = DEFAULT_START_HOUR,
    default_end_hour: int = DEFAULT_END_HOUR,
) -> VisibleWindow:
    """Pick the visible window: request override, then stored hours, then defaults."""

    start_hour = default_start_hour
    end_hour = default_end_hour
    if preferences is not None:
        if preferences.timetable_start is not None:
            start_hour = preferences.timetable_start
        if preferences.timetable_end is not None:
            end_hour = preferences.timetable_end

    start = _override_minutes(start_override, start_hour * 60)
    end = _override_minutes(end_override, end_hour * 60)
    if end <= start:
        raise ClientInputError("end must be after start.")
    return VisibleWindow(start_minute=start, end_minute=end)


@dataclass(slots=True)
class PreferenceResolver:
    repository: PreferenceRepository
    default_start_hour: int = DEFAULT_START_HOUR
    default_end_hour: int = DEFAULT_END_HOUR

    def load(self, user_id: str) -> Optional[TimetablePreferences]:
        """Stored preferences, or ``None`` when absent or unreadable."""

        try:
            preferences = self.repository.fetch(user_id)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not fetch user settings for %s: %s", user_id, exc)
            return None
        logger.debug("User settings for %s: %s", user_id, preferences)
        return preferences

    def resolve(
        self,
        preferences: Optional[TimetablePreferences],
        start_override: Optional[str] = None,
        end_override: Optional[str] = None,
    ) -> VisibleWindow:
        return resolve_window(
            preferences,
            start_override,
            end_override,
            default_start_hour=self.default_start_hour,
            default_end_hour=self.default_end_hour,
        )
