from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from dayglance.config.settings import SupabaseSettings
from dayglance.data import SupabaseGateway, TitleCipher

TEST_KEY = "0123456789abcdef" * 4

TEST_SUPABASE = SupabaseSettings(
    url="https://example.supabase.co",
    anon_key="anon",
    service_role_key="service",
)


class FakeQuery:
    """Records PostgREST builder calls and returns canned rows on ``execute``."""

    def __init__(self, table: str, rows: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.table = table
        self.rows = rows
        self.error = error
        self.calls: list[tuple] = []

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return record

    def execute(self):
        self.calls.append(("execute", (), {}))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[dict(row) for row in self.rows] if isinstance(self.rows, list) else self.rows)

    def called(self, name: str) -> list[tuple]:
        return [call[1] for call in self.calls if call[0] == name]


class FakeAdmin:
    def __init__(self, user: Any = None, error: Optional[Exception] = None):
        self.user = user
        self.error = error

    def get_user_by_id(self, user_id: str):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(user=self.user)


class FakeClient:
    def __init__(self, tables: Optional[Dict[str, FakeQuery]] = None, admin: Optional[FakeAdmin] = None):
        self.tables = tables or {}
        self.auth = SimpleNamespace(admin=admin or FakeAdmin())
        self.requested: list[str] = []

    def table(self, name: str) -> FakeQuery:
        self.requested.append(name)
        if name not in self.tables:
            self.tables[name] = FakeQuery(name, rows=[])
        return self.tables[name]


def fake_gateway(client: FakeClient) -> SupabaseGateway:
    return SupabaseGateway(TEST_SUPABASE, _client=client)


def make_cipher() -> TitleCipher:
    return TitleCipher(TEST_KEY)


