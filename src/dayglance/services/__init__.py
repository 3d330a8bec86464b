"""Application services orchestrating data access and schedule logic."""

from __future__ import annotations

from .context import ServiceContext
from .preferences import PreferenceResolver, resolve_window
from .schedule import ScheduleRequest, ScheduleService, ScheduleTimeline
from .sources import ExternalEventSource, TaskSource
from .timeline import merge_timeline

__all__ = [
    "ExternalEventSource",
    "PreferenceResolver",
    "ScheduleRequest",
    "ScheduleService",
    "ScheduleTimeline",
    "ServiceContext",
    "TaskSource",
    "merge_timeline",
    "resolve_window",
]
