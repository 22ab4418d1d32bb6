# core/services/audit.py

from __future__ import annotations

import logging

from core.models import AuditLog

logger = logging.getLogger(__name__)


def _client_ip(request) -> str | None:
    if request is None:
        return None
    xff = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if xff:
        return xff.split(",")[0].strip() or None
    return request.META.get("REMOTE_ADDR") or None


def log_audit(
    *,
    table_name: str,
    record_id,
    action: str,
    old_values: dict | None = None,
    new_values: dict | None = None,
    actor=None,
    request=None,
) -> AuditLog:
    """
    Append one audit row. Runs inside the caller's transaction so the
    audit entry commits (or rolls back) together with the change it records.
    """
    if actor is None and request is not None:
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            actor = user

    if actor is not None and not getattr(actor, "is_authenticated", False):
        actor = None

    user_agent = ""
    if request is not None:
        user_agent = (request.META.get("HTTP_USER_AGENT") or "")[:255]

    entry = AuditLog.objects.create(
        table_name=table_name,
        record_id=str(record_id),
        action=action,
        old_values=old_values,
        new_values=new_values,
        actor=actor,
        ip_address=_client_ip(request),
        user_agent=user_agent,
    )

    logger.info(
        "Audit entry recorded",
        extra={"table": table_name, "record_id": str(record_id), "action": action},
    )
    return entry
