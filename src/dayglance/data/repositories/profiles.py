from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..supabase import SupabaseGateway

_NAME_KEYS = ("full_name", "name", "display_name")


def display_name_from_user(user: Any) -> Optional[str]:
    metadata: Mapping[str, Any] = getattr(user, "user_metadata", None) or {}
    for key in _NAME_KEYS:
        value = metadata.get(key)
        if value:
            return str(value)
    email = getattr(user, "email", None)
    if email:
        return email.split("@")[0] or None
    return None


@dataclass(slots=True)
class ProfileRepository:
    gateway: SupabaseGateway

    def fetch_display_name(self, user_id: str) -> Optional[str]:
        user = self.gateway.run("user profile", lambda: self.gateway.fetch_user(user_id))
        if user is None:
            return None
        return display_name_from_user(user)
