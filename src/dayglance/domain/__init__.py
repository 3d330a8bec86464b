"""Domain models and error taxonomy for schedule rendering."""

from __future__ import annotations

from .errors import (
    ClientInputError,
    ConfigurationError,
    DataAccessError,
    DecryptionError,
    ProcessingError,
    RenderingError,
    ScheduleError,
)
from .models import (
    EXTERNAL_DEFAULT_COLOR,
    TASK_DEFAULT_COLOR,
    ExternalEventRecord,
    RenderedSchedule,
    ScheduleItem,
    TaskRecord,
    TimetablePreferences,
    VisibleWindow,
)

__all__ = [
    "EXTERNAL_DEFAULT_COLOR",
    "TASK_DEFAULT_COLOR",
    "ClientInputError",
    "ConfigurationError",
    "DataAccessError",
    "DecryptionError",
    "ExternalEventRecord",
    "ProcessingError",
    "RenderedSchedule",
    "RenderingError",
    "ScheduleError",
    "ScheduleItem",
    "TaskRecord",
    "TimetablePreferences",
    "VisibleWindow",
]
