from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ...domain import DataAccessError, TimetablePreferences
from ..supabase import SupabaseGateway

logger = logging.getLogger(__name__)

_PREFERENCE_COLUMNS = "timetable_start,timetable_end,theme,show_time_needle"


@dataclass(slots=True)
class PreferenceRepository:
    """Looks up timetable preferences across an ordered list of candidate tables.

    The first table that answers without error wins, even when it has no row
    for the user. Only when every table fails is the last error raised.
    """

    gateway: SupabaseGateway
    table_names: Sequence[str]

    def fetch(self, user_id: str) -> Optional[TimetablePreferences]:
        last_error: Optional[DataAccessError] = None
        for table_name in self.table_names:
            try:
                response = self.gateway.run(
                    f"preferences from {table_name}",
                    lambda: (
                        self.gateway.table(table_name)
                        .select(_PREFERENCE_COLUMNS)
                        .eq("user_id", user_id)
                        .maybe_single()
                        .execute()
                    ),
                )
            except DataAccessError as exc:
                logger.debug("Preference source %s failed: %s", table_name, exc)
                last_error = exc
                continue
            data = getattr(response, "data", None) if response is not None else None
            if not data:
                return None
            return TimetablePreferences.from_record(data)
        if last_error is not None:
            raise last_error
        return None
