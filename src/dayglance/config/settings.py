from __future__ import annotations

import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

from ..domain.errors import ConfigurationError

load_dotenv()

_HEX_KEY = re.compile(r"^[0-9a-fA-F]{64}$")


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]
    service_role_key: Optional[str]
    schema: str = "public"

    @property
    def missing_env_vars(self) -> List[str]:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        if not self.service_role_key:
            missing.append("SUPABASE_SERVICE_ROLE_KEY")
        return missing


@dataclass(frozen=True)
class EncryptionSettings:
    key_hex: Optional[str]

    @property
    def is_valid(self) -> bool:
        return bool(self.key_hex and _HEX_KEY.match(self.key_hex))


@dataclass(frozen=True)
class StorageSettings:
    tasks_table: str
    external_events_table: str
    calendar_connections_table: str
    preferences_tables: tuple[str, ...]


@dataclass(frozen=True)
class TimetableSettings:
    default_start_hour: int
    default_end_hour: int
    default_timezone: str


@dataclass(frozen=True)
class HttpSettings:
    host: str
    port: int
    cache_max_age: int
    cdn_max_age: int


@dataclass(frozen=True)
class AppSettings:
    supabase: SupabaseSettings
    encryption: EncryptionSettings
    storage: StorageSettings
    timetable: TimetableSettings
    http: HttpSettings

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if credentials are missing or malformed."""

        missing = list(self.supabase.missing_env_vars)
        if not self.encryption.key_hex:
            missing.append("ENCRYPTION_KEY")
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")
        if not self.encryption.is_valid:
            raise ConfigurationError("ENCRYPTION_KEY must be a 64-character hex string.")


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _tables_from_env(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name) or default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
        service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY"),
        schema=os.getenv("SUPABASE_SCHEMA", "public"),
    )

    encryption = EncryptionSettings(key_hex=os.getenv("ENCRYPTION_KEY"))

    storage = StorageSettings(
        tasks_table=os.getenv("SUPABASE_TASKS_TABLE", "tasks"),
        external_events_table=os.getenv("SUPABASE_EXTERNAL_EVENTS_TABLE", "external_events"),
        calendar_connections_table=os.getenv("SUPABASE_CALENDAR_CONNECTIONS_TABLE", "calendar_connections"),
        preferences_tables=_tables_from_env("SUPABASE_PREFERENCES_TABLES", "UserSettings,user_settings"),
    )

    timetable = TimetableSettings(
        default_start_hour=_int_from_env("DAYGLANCE_DEFAULT_START_HOUR", 8),
        default_end_hour=_int_from_env("DAYGLANCE_DEFAULT_END_HOUR", 18),
        default_timezone=os.getenv("DAYGLANCE_DEFAULT_TZ", "UTC"),
    )

    http = HttpSettings(
        host=os.getenv("DAYGLANCE_HOST", "127.0.0.1"),
        port=_int_from_env("DAYGLANCE_PORT", 8000),
        cache_max_age=_int_from_env("DAYGLANCE_CACHE_MAX_AGE", 60),
        cdn_max_age=_int_from_env("DAYGLANCE_CDN_MAX_AGE", 300),
    )

    return AppSettings(
        supabase=supabase,
        encryption=encryption,
        storage=storage,
        timetable=timetable,
        http=http,
    )
