"""Supabase repositories for the rows a schedule is built from."""

from __future__ import annotations

from .external_events import ExternalEventRepository
from .preferences import PreferenceRepository
from .profiles import ProfileRepository, display_name_from_user
from .tasks import TaskRepository

__all__ = [
    "ExternalEventRepository",
    "PreferenceRepository",
    "ProfileRepository",
    "TaskRepository",
    "display_name_from_user",
]
