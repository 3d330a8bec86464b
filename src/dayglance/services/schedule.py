from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Callable, List, Optional, Protocol

from ..domain import (
    ClientInputError,
    RenderedSchedule,
    ScheduleItem,
    TimetablePreferences,
    VisibleWindow,
)
from ..render import compute_layout, palette_for, render_schedule_svg
from ..utils.timefmt import current_date_in_zone, minute_of_day, parse_calendar_date, resolve_zone, utc_day_window
from .context import ServiceContext
from .preferences import PreferenceResolver
from .sources import ExternalEventSource, TaskSource
from .timeline import merge_timeline

logger = logging.getLogger(__name__)


class DisplayNameLookup(Protocol):
    def fetch_display_name(self, user_id: str) -> Optional[str]: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class ScheduleRequest:
    user: str
    date: str
    tz: str = "UTC"
    start: Optional[str] = None
    end: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ScheduleTimeline:
    user: str
    date_ymd: str
    tz_name: str
    tz: tzinfo
    window: VisibleWindow
    preferences: Optional[TimetablePreferences]
    display_name: Optional[str]
    items: tuple[ScheduleItem, ...]


@dataclass(slots=True)
class ScheduleService:
    """Runs one request through fetch, merge, layout and render."""

    tasks: TaskSource
    external: ExternalEventSource
    preferences: PreferenceResolver
    profiles: DisplayNameLookup
    clock: Callable[[], datetime] = _utc_now

    @classmethod
    def from_context(cls, context: ServiceContext) -> "ScheduleService":
        timetable = context.settings.timetable
        return cls(
            tasks=TaskSource(repository=context.tasks, cipher=context.cipher),
            external=ExternalEventSource(repository=context.external_events),
            preferences=PreferenceResolver(
                repository=context.preferences,
                default_start_hour=timetable.default_start_hour,
                default_end_hour=timetable.default_end_hour,
            ),
            profiles=context.profiles,
        )

    def _display_name(self, user_id: str) -> Optional[str]:
        try:
            return self.profiles.fetch_display_name(user_id)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to fetch user display name for %s: %s", user_id, exc)
            return None

    def _resolve_date(self, raw: str, tz: tzinfo) -> str:
        if raw.lower() == "today":
            return current_date_in_zone(self.clock(), tz)
        date_ymd = parse_calendar_date(raw)
        if date_ymd is None:
            raise ClientInputError('Invalid date. Use "today" or YYYY-MM-DD.')
        utc_day_window(date_ymd)
        return date_ymd

    def build_timeline(self, request: ScheduleRequest) -> ScheduleTimeline:
        user = (request.user or "").strip()
        raw_date = (request.date or "").strip()
        tz_name = (request.tz or "UTC").strip() or "UTC"
        if not user:
            raise ClientInputError("Missing required query parameter: user")
        if not raw_date:
            raise ClientInputError("Missing required query parameter: date")
        tz = resolve_zone(tz_name)
        date_ymd = self._resolve_date(raw_date, tz)
        logger.debug("Date resolved: %s -> %s (%s)", raw_date, date_ymd, tz_name)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="dayglance") as pool:
            preferences_future = pool.submit(self.preferences.load, user)
            name_future = pool.submit(self._display_name, user)
            preferences = preferences_future.result()
            window = self.preferences.resolve(preferences, request.start, request.end)

            tasks_future = pool.submit(self.tasks.fetch, user, date_ymd)
            external_future = pool.submit(self.external.fetch, user, date_ymd, tz)
            task_items: List[ScheduleItem] = tasks_future.result()
            external_items: List[ScheduleItem] = external_future.result()
            display_name = name_future.result()

        items = merge_timeline(task_items, external_items)
        logger.debug("Timeline for %s on %s has %d items", user, date_ymd, len(items))
        return ScheduleTimeline(
            user=user,
            date_ymd=date_ymd,
            tz_name=tz_name,
            tz=tz,
            window=window,
            preferences=preferences,
            display_name=display_name,
            items=tuple(items),
        )

    def render(self, request: ScheduleRequest) -> RenderedSchedule:
        timeline = self.build_timeline(request)
        now = self.clock()

        show_needle = bool(timeline.preferences and timeline.preferences.show_time_needle)
        now_minute = None
        if show_needle and current_date_in_zone(now, timeline.tz) == timeline.date_ymd:
            now_minute = minute_of_day(now, timeline.tz)

        layout = compute_layout(
            timeline.items,
            timeline.window,
            show_needle=show_needle,
            now_minute=now_minute,
        )
        theme = timeline.preferences.theme if timeline.preferences else None
        svg = render_schedule_svg(
            layout,
            user=timeline.user,
            display_name=timeline.display_name,
            date_ymd=timeline.date_ymd,
            tz_name=timeline.tz_name,
            palette=palette_for(theme),
        )
        logger.info(
            "Rendered schedule for %s on %s: %d of %d items visible",
            timeline.user,
            timeline.date_ymd,
            len(layout.boxes),
            len(timeline.items),
        )
        return RenderedSchedule(
            svg=svg,
            date_ymd=timeline.date_ymd,
            timezone=timeline.tz_name,
            window=timeline.window,
            items=timeline.items,
            generated_at=now,
        )
