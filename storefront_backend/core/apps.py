# core/apps.py

"""
CORE APP CONFIG

Shared storefront plumbing:
- Structured operation results + error kinds
- Money helpers (2dp, ROUND_HALF_UP)
- Process-wide system settings (cached, explicit reload)
- Append-only audit log
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Storefront Core"
