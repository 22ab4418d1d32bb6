# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS
- In-memory SQLite (fast, isolated)
- Throttling disabled so API tests are not rate limited
- Strict order transitions ON (matches production default)
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import REST_FRAMEWORK

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": (),
    # views that pin their own throttles still count against the shared cache
    "DEFAULT_THROTTLE_RATES": {
        **REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"],
        "public_poll": "10000/min",
        "public_write": "10000/min",
    },
}

ORDER_NUMBER_PREFIX = "TSF"
ORDER_STRICT_TRANSITIONS = True
CURRENCY_LABEL = "Rs."
