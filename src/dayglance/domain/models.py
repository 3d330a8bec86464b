from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .errors import ClientInputError

MINUTES_PER_DAY = 24 * 60

TASK_DEFAULT_COLOR = "#0d9488"
EXTERNAL_DEFAULT_COLOR = "#3b82f6"


def clock_to_minutes(text: str) -> int:
    """Minutes after midnight for a trusted ``HH:MM`` string."""

    hours, minutes = text.split(":")
    return int(hours) * 60 + int(minutes)


@dataclass(frozen=True, slots=True)
class ScheduleItem:
    """One renderable timeline entry, already decrypted and projected to clock time."""

    title: str
    start: str
    end: str
    is_completed: bool = False
    location: Optional[str] = None
    color: Optional[str] = None
    is_external: bool = False

    @property
    def start_minute(self) -> int:
        return clock_to_minutes(self.start)

    @property
    def end_minute(self) -> int:
        return clock_to_minutes(self.end)

    @property
    def display_color(self) -> str:
        if self.color:
            return self.color
        return EXTERNAL_DEFAULT_COLOR if self.is_external else TASK_DEFAULT_COLOR


@dataclass(frozen=True, slots=True)
class VisibleWindow:
    start_minute: int
    end_minute: int

    def __post_init__(self) -> None:
        for value in (self.start_minute, self.end_minute):
            if not 0 <= value <= MINUTES_PER_DAY:
                raise ClientInputError(f"Window bound {value} is outside 0..{MINUTES_PER_DAY} minutes.")
        if self.end_minute <= self.start_minute:
            raise ClientInputError("end must be after start.")

    @property
    def total_minutes(self) -> int:
        return max(1, self.end_minute - self.start_minute)

    def contains(self, minute: int) -> bool:
        return self.start_minute <= minute <= self.end_minute


@dataclass(frozen=True, slots=True)
class TimetablePreferences:
    timetable_start: Optional[int] = None
    timetable_end: Optional[int] = None
    show_time_needle: bool = False
    theme: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "TimetablePreferences":
        start = record.get("timetable_start")
        end = record.get("timetable_end")
        return cls(
            timetable_start=int(start) if start is not None else None,
            timetable_end=int(end) if end is not None else None,
            show_time_needle=bool(record.get("show_time_needle") or False),
            theme=record.get("theme"),
        )


@dataclass(frozen=True, slots=True)
class TaskRecord:
    """A first-party task row as stored; ``title`` is still ciphertext."""

    title: str
    scheduled_time: Any
    duration_minutes: Optional[Any] = None
    is_completed: bool = False

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "TaskRecord":
        return cls(
            title=str(record.get("title") or ""),
            scheduled_time=record.get("scheduled_time"),
            duration_minutes=record.get("duration_minutes"),
            is_completed=bool(record.get("is_completed") or False),
        )


@dataclass(frozen=True, slots=True)
class ExternalEventRecord:
    title: str
    start_time: Any
    end_time: Any
    all_day: bool = False
    location: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ExternalEventRecord":
        return cls(
            title=str(record.get("title") or ""),
            start_time=record.get("start_time"),
            end_time=record.get("end_time"),
            all_day=bool(record.get("all_day") or False),
            location=record.get("location") or None,
        )


@dataclass(frozen=True, slots=True)
class RenderedSchedule:
    """Result of one request: the document plus what went into it."""

    svg: str
    date_ymd: str
    timezone: str
    window: VisibleWindow
    items: tuple[ScheduleItem, ...]
    generated_at: datetime
