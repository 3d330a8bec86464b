from __future__ import annotations

from dataclasses import dataclass, field

from ..config import AppSettings, get_settings
from ..data import SupabaseGateway, TitleCipher
from ..data.repositories import (
    ExternalEventRepository,
    PreferenceRepository,
    ProfileRepository,
    TaskRepository,
)


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root sharing settings, the Supabase gateway and repositories.

    Construction validates credentials, so a context only exists once the
    environment is known to be complete.
    """

    settings: AppSettings = field(default_factory=get_settings)
    gateway: SupabaseGateway = field(init=False)
    cipher: TitleCipher = field(init=False)
    tasks: TaskRepository = field(init=False)
    external_events: ExternalEventRepository = field(init=False)
    preferences: PreferenceRepository = field(init=False)
    profiles: ProfileRepository = field(init=False)

    def __post_init__(self) -> None:
        self.settings.validate()
        self.gateway = SupabaseGateway(self.settings.supabase)
        self.cipher = TitleCipher(self.settings.encryption.key_hex or "")
        self.tasks = TaskRepository(
            gateway=self.gateway,
            table_name=self.settings.storage.tasks_table,
        )
        self.external_events = ExternalEventRepository(
            gateway=self.gateway,
            table_name=self.settings.storage.external_events_table,
            connections_table=self.settings.storage.calendar_connections_table,
        )
        self.preferences = PreferenceRepository(
            gateway=self.gateway,
            table_names=self.settings.storage.preferences_tables,
        )
        self.profiles = ProfileRepository(gateway=self.gateway)
