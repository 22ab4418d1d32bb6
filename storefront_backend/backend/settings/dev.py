# backend/settings/dev.py
"""
LOCAL DEVELOPMENT SETTINGS

- sqlite fallback from base (DATABASE_URL unset)
- storefront frontend on localhost:3000
- storefront loggers at DEBUG unless LOG_LEVEL says otherwise
- relaxed order transitions can be tried with ORDER_STRICT_TRANSITIONS=false
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

STOREFRONT_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=STOREFRONT_ORIGINS)
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=STOREFRONT_ORIGINS)
CORS_ALLOW_CREDENTIALS = True

_dev_level = env.str("LOG_LEVEL", default="DEBUG").strip().upper()
for _name in ("core", "coupons", "customers", "orders"):
    LOGGING["loggers"][_name]["level"] = _dev_level
