from __future__ import annotations

import os
import unittest
from unittest import mock

from dayglance.config import get_settings
from dayglance.data import SupabaseGateway
from dayglance.config.settings import SupabaseSettings
from dayglance.domain import ConfigurationError

from support import TEST_KEY

FULL_ENV = {
    "SUPABASE_URL": "https://example.supabase.co",
    "SUPABASE_ANON_KEY": "anon",
    "SUPABASE_SERVICE_ROLE_KEY": "service",
    "ENCRYPTION_KEY": TEST_KEY,
}


class TestSettings(unittest.TestCase):
    def setUp(self) -> None:
        get_settings.cache_clear()
        self.addCleanup(get_settings.cache_clear)

    def test_complete_environment_validates(self) -> None:
        with mock.patch.dict(os.environ, FULL_ENV, clear=True):
            settings = get_settings()
            settings.validate()
        self.assertEqual(settings.storage.preferences_tables, ("UserSettings", "user_settings"))
        self.assertEqual(settings.timetable.default_start_hour, 8)
        self.assertEqual(settings.timetable.default_end_hour, 18)
        self.assertEqual(settings.http.cache_max_age, 60)

    def test_missing_variables_are_listed(self) -> None:
        with mock.patch.dict(os.environ, {"SUPABASE_URL": "https://x"}, clear=True):
            with self.assertRaises(ConfigurationError) as ctx:
                get_settings().validate()
        message = ctx.exception.message
        for name in ("SUPABASE_ANON_KEY", "SUPABASE_SERVICE_ROLE_KEY", "ENCRYPTION_KEY"):
            self.assertIn(name, message)
        self.assertNotIn("SUPABASE_URL", message)

    def test_short_encryption_key_is_rejected(self) -> None:
        with mock.patch.dict(os.environ, {**FULL_ENV, "ENCRYPTION_KEY": "abcd"}, clear=True):
            with self.assertRaises(ConfigurationError) as ctx:
                get_settings().validate()
        self.assertIn("64-character", ctx.exception.message)

    def test_table_overrides(self) -> None:
        env = {**FULL_ENV, "SUPABASE_PREFERENCES_TABLES": " prefs , , legacy_prefs ", "DAYGLANCE_DEFAULT_START_HOUR": "x"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = get_settings()
        self.assertEqual(settings.storage.preferences_tables, ("prefs", "legacy_prefs"))
        self.assertEqual(settings.timetable.default_start_hour, 8)


class TestGateway(unittest.TestCase):
    def test_client_creation_requires_service_role_key(self) -> None:
        gateway = SupabaseGateway(SupabaseSettings(url="https://x", anon_key="anon", service_role_key=None))
        with self.assertRaises(ConfigurationError):
            gateway.ensure_client()

    def test_client_is_created_once(self) -> None:
        settings = SupabaseSettings(url="https://x.supabase.co", anon_key="anon", service_role_key="service")
        gateway = SupabaseGateway(settings)
        sentinel = object()
        with mock.patch("dayglance.data.supabase.create_client", return_value=sentinel) as factory:
            self.assertIs(gateway.ensure_client(), sentinel)
            self.assertIs(gateway.ensure_client(), sentinel)
        factory.assert_called_once()
        self.assertEqual(factory.call_args.args[:2], ("https://x.supabase.co", "service"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
