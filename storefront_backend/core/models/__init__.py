# core/models/__init__.py

from .audit_log import AuditLog
from .system_setting import SystemSetting

__all__ = [
    "AuditLog",
    "SystemSetting",
]
