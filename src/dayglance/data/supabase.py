from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from postgrest.exceptions import APIError
from supabase import Client, ClientOptions, create_client

from ..config.settings import SupabaseSettings
from ..domain.errors import ConfigurationError, DataAccessError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SupabaseGateway:
    """Server-side Supabase handle built once with the service role key.

    The client is created lazily under a lock and never replaced afterwards,
    so concurrent requests share one read-only handle.
    """

    settings: SupabaseSettings
    _client: Optional[Client] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def ensure_client(self) -> Client:
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                missing = self.settings.missing_env_vars
                if missing:
                    raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")
                logger.debug("Creating Supabase client for %s with service role key", self.settings.url)
                self._client = create_client(
                    self.settings.url,
                    self.settings.service_role_key,
                    options=ClientOptions(
                        schema=self.settings.schema,
                        auto_refresh_token=False,
                        persist_session=False,
                    ),
                )
        return self._client

    def table(self, name: str):
        return self.ensure_client().table(name)

    def run(self, source: str, query: Callable[[], T]) -> T:
        """Execute ``query`` and fold any upstream failure into ``DataAccessError``."""

        try:
            return query()
        except APIError as exc:
            raise DataAccessError(exc.message, code=exc.code, source=source) from exc
        except (ConfigurationError, DataAccessError):
            raise
        except Exception as exc:  # noqa: BLE001
            raise DataAccessError(str(exc) or exc.__class__.__name__, source=source) from exc

    def fetch_user(self, user_id: str) -> Any:
        response = self.ensure_client().auth.admin.get_user_by_id(user_id)
        return getattr(response, "user", None)
