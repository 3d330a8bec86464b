"""Adapters turning raw task and synced-event rows into ``ScheduleItem``s."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta, timezone, tzinfo
from typing import List

from ..data.crypto import TitleCipher
from ..data.repositories import ExternalEventRepository, TaskRepository
from ..domain import (
    DecryptionError,
    ExternalEventRecord,
    ProcessingError,
    ScheduleItem,
    TaskRecord,
)
from ..utils.timefmt import format_clock_in_zone, parse_instant, utc_day_window

logger = logging.getLogger(__name__)

ALL_DAY_START = "00:00"
ALL_DAY_END = "23:59"


@dataclass(slots=True)
class TaskSource:
    """First-party tasks for one UTC calendar day.

    The day boundary is UTC midnight and clock times are formatted in UTC,
    whatever timezone the schedule is rendered in.
    """

    repository: TaskRepository
    cipher: TitleCipher

    def fetch(self, user_id: str, date_ymd: str) -> List[ScheduleItem]:
        day_start, day_end = utc_day_window(date_ymd)
        records = self.repository.fetch_window(user_id, day_start, day_end)
        logger.debug("Fetched %d task rows for %s on %s", len(records), user_id, date_ymd)
        return [self._to_item(record) for record in records]

    def _to_item(self, record: TaskRecord) -> ScheduleItem:
        try:
            start = parse_instant(record.scheduled_time)
            duration = int(record.duration_minutes or 0)
            end = start + timedelta(minutes=duration)
            title = self.cipher.decrypt(record.title)
        except (DecryptionError, ValueError, TypeError, OverflowError) as exc:
            logger.error("Error processing task %r: %s", record.title, exc)
            raise ProcessingError(record.title, str(exc)) from exc
        return ScheduleItem(
            title=title,
            start=format_clock_in_zone(start, timezone.utc),
            end=format_clock_in_zone(end, timezone.utc),
            is_completed=record.is_completed,
            is_external=False,
        )


@dataclass(slots=True)
class ExternalEventSource:
    """Synced calendar events overlapping one UTC day, shown in the display timezone."""

    repository: ExternalEventRepository

    def fetch(self, user_id: str, date_ymd: str, tz: tzinfo) -> List[ScheduleItem]:
        day_start, day_end = utc_day_window(date_ymd)
        records = self.repository.fetch_overlapping(user_id, day_start, day_end)
        logger.debug("Fetched %d external event rows for %s on %s", len(records), user_id, date_ymd)
        items: list[ScheduleItem] = []
        for record in records:
            try:
                items.append(self._to_item(record, day_start, day_end, tz))
            except (ValueError, TypeError, OverflowError) as exc:
                logger.error("Error processing external event %r: %s", record.title, exc)
                raise ProcessingError(record.title, str(exc)) from exc
        return items

    @staticmethod
    def _to_item(record: ExternalEventRecord, day_start, day_end, tz: tzinfo) -> ScheduleItem:
        if record.all_day:
            start_clock, end_clock = ALL_DAY_START, ALL_DAY_END
        else:
            start = max(parse_instant(record.start_time), day_start)
            end = min(parse_instant(record.end_time), day_end)
            local_start = start.astimezone(tz)
            local_end = end.astimezone(tz)
            start_clock = format_clock_in_zone(start, tz)
            if local_end.date() > local_start.date():
                end_clock = ALL_DAY_END
            else:
                end_clock = format_clock_in_zone(end, tz)
        return ScheduleItem(
            title=record.title,
            start=start_clock,
            end=end_clock,
            location=record.location,
            is_external=True,
        )
