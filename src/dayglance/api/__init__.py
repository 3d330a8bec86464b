"""Wire payloads for the HTTP surface."""

from __future__ import annotations

from .models import ErrorPayload, ScheduleItemPayload, TimelinePayload, WindowPayload

__all__ = ["ErrorPayload", "ScheduleItemPayload", "TimelinePayload", "WindowPayload"]
