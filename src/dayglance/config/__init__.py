"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    AppSettings,
    EncryptionSettings,
    HttpSettings,
    StorageSettings,
    SupabaseSettings,
    TimetableSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "EncryptionSettings",
    "HttpSettings",
    "StorageSettings",
    "SupabaseSettings",
    "TimetableSettings",
    "get_settings",
]
