# core/services/system_settings.py

"""
SYSTEM SETTINGS (PROCESS-WIDE, EXPLICIT RELOAD)

Purpose:
- Single read path for SystemSetting rows (SMTP, WhatsApp, storefront toggles).
- Values are loaded once per process on first access and cached.
- Writers go through set_setting(), which reloads the cache.
- Other processes pick up changes via reload_settings() (admin action,
  management hook, or restart).

There is no module-level mutable dict exposed to callers: get_setting()
returns coerced copies.
"""

from __future__ import annotations

import json
import logging
import threading
from decimal import Decimal, InvalidOperation

from django.db import transaction

from core.models import SystemSetting

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_cache: dict[str, tuple[str, str]] | None = None

_TRUTHY = {"1", "true", "yes", "on"}


def _coerce(raw: str, value_type: str):
    if value_type == SystemSetting.ValueType.INTEGER:
        return int(raw)
    if value_type == SystemSetting.ValueType.BOOLEAN:
        return raw.strip().lower() in _TRUTHY
    if value_type == SystemSetting.ValueType.DECIMAL:
        return Decimal(raw)
    if value_type == SystemSetting.ValueType.JSON:
        return json.loads(raw) if raw else None
    return raw


def reload_settings() -> int:
    """
    Re-read every SystemSetting row into the process cache.
    Returns the number of keys loaded.
    """
    global _cache

    rows = SystemSetting.objects.values_list("key", "value", "value_type")
    fresh = {key: (value, value_type) for key, value, value_type in rows}

    with _lock:
        _cache = fresh

    logger.info("System settings reloaded", extra={"keys": len(fresh)})
    return len(fresh)


def clear_settings_cache() -> None:
    """Drop the cache; the next get_setting() reloads from the database."""
    global _cache
    with _lock:
        _cache = None


def get_setting(key: str, default=None):
    with _lock:
        loaded = _cache is not None

    if not loaded:
        reload_settings()

    with _lock:
        entry = (_cache or {}).get(key)

    if entry is None:
        return default

    raw, value_type = entry
    try:
        return _coerce(raw, value_type)
    except (ValueError, InvalidOperation, json.JSONDecodeError):
        logger.warning(
            "System setting has an unparseable value; using default",
            extra={"key": key, "value_type": value_type},
        )
        return default


def set_setting(
    key: str,
    value,
    *,
    value_type: str = SystemSetting.ValueType.STRING,
    category: str = "general",
) -> SystemSetting:
    if value_type == SystemSetting.ValueType.JSON and not isinstance(value, str):
        raw = json.dumps(value)
    elif isinstance(value, bool):
        raw = "true" if value else "false"
    else:
        raw = "" if value is None else str(value)

    with transaction.atomic():
        setting, _ = SystemSetting.objects.update_or_create(
            key=key,
            defaults={"value": raw, "value_type": value_type, "category": category},
        )

    reload_settings()
    return setting
