# core/tests/test_system_settings.py

from decimal import Decimal

from django.test import TestCase

from core.models import SystemSetting
from core.services.system_settings import (
    clear_settings_cache,
    get_setting,
    reload_settings,
    set_setting,
)


class SystemSettingsTests(TestCase):
    """
    GUARANTEES:
    - Values are coerced by value_type
    - Cache is explicit: direct DB edits are invisible until reload_settings()
    """

    def setUp(self):
        clear_settings_cache()

    def tearDown(self):
        clear_settings_cache()

    def test_missing_key_returns_default(self):
        self.assertIsNone(get_setting("smtp_host"))
        self.assertEqual(get_setting("smtp_host", "localhost"), "localhost")

    def test_set_setting_coerces_types(self):
        set_setting("smtp_port", 587, value_type=SystemSetting.ValueType.INTEGER, category="smtp")
        set_setting("whatsapp_enabled", True, value_type=SystemSetting.ValueType.BOOLEAN)
        set_setting("free_delivery_over", "2500.50", value_type=SystemSetting.ValueType.DECIMAL)
        set_setting("smtp_extra", {"tls": True}, value_type=SystemSetting.ValueType.JSON)

        self.assertEqual(get_setting("smtp_port"), 587)
        self.assertIs(get_setting("whatsapp_enabled"), True)
        self.assertEqual(get_setting("free_delivery_over"), Decimal("2500.50"))
        self.assertEqual(get_setting("smtp_extra"), {"tls": True})

    def test_direct_db_change_needs_explicit_reload(self):
        set_setting("smtp_host", "mail.one.test")
        SystemSetting.objects.filter(key="smtp_host").update(value="mail.two.test")

        self.assertEqual(get_setting("smtp_host"), "mail.one.test")

        reload_settings()
        self.assertEqual(get_setting("smtp_host"), "mail.two.test")

    def test_unparseable_value_falls_back_to_default(self):
        SystemSetting.objects.create(
            key="smtp_port",
            value="not-a-number",
            value_type=SystemSetting.ValueType.INTEGER,
        )
        reload_settings()
        self.assertEqual(get_setting("smtp_port", 25), 25)
