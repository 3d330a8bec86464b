from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import ScheduleError, ScheduleItem, VisibleWindow
from ..services import ScheduleTimeline
from ..utils.timefmt import minutes_to_clock


class ErrorPayload(BaseModel):
    error: str
    category: str

    @classmethod
    def from_error(cls, error: ScheduleError) -> "ErrorPayload":
        return cls(error=error.message, category=error.category)


class ScheduleItemPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    start: str
    end: str
    is_completed: bool = Field(default=False, alias="isCompleted")
    location: Optional[str] = Field(default=None)
    color: str
    is_external: bool = Field(default=False, alias="isExternal")

    @classmethod
    def from_domain(cls, item: ScheduleItem) -> "ScheduleItemPayload":
        return cls(
            title=item.title,
            start=item.start,
            end=item.end,
            is_completed=item.is_completed,
            location=item.location,
            color=item.display_color,
            is_external=item.is_external,
        )


class WindowPayload(BaseModel):
    start: str
    end: str
    start_minute: int = Field(alias="startMinute")
    end_minute: int = Field(alias="endMinute")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, window: VisibleWindow) -> "WindowPayload":
        return cls(
            start=minutes_to_clock(window.start_minute),
            end=minutes_to_clock(window.end_minute),
            start_minute=window.start_minute,
            end_minute=window.end_minute,
        )


class TimelinePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: str
    display_name: Optional[str] = Field(default=None, alias="displayName")
    date: str
    tz: str
    window: WindowPayload
    items: List[ScheduleItemPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, timeline: ScheduleTimeline) -> "TimelinePayload":
        return cls(
            user=timeline.user,
            display_name=timeline.display_name,
            date=timeline.date_ymd,
            tz=timeline.tz_name,
            window=WindowPayload.from_domain(timeline.window),
            items=[ScheduleItemPayload.from_domain(item) for item in timeline.items],
        )
