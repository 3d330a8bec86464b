"""Data access layer."""

from __future__ import annotations

from .crypto import TitleCipher
from .supabase import SupabaseGateway

__all__ = ["SupabaseGateway", "TitleCipher"]
