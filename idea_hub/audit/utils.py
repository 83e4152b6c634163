from __future__ import annotations

import logging

from django.contrib.auth import get_user_model

from .models import AuditLog

logger = logging.getLogger(__name__)


def client_ip(request) -> str:
    """Best-effort caller address; the first X-Forwarded-For hop wins."""
    if request is None:
        return ""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "")


def log_action(  # noqa: PLR0913
    action: str,
    *,
    actor: object | None = None,
    message: str = "",
    model_name: str = "",
    record_id: object | None = None,
    before: dict | list | None = None,
    after: dict | list | None = None,
    ip_address: str = "",
) -> AuditLog:
    """Append one audit row. Non-user actors (tasks, commands) are stored as null."""
    actor_user = actor if isinstance(actor, get_user_model()) else None
    entry = AuditLog.objects.create(
        action=action,
        actor=actor_user,
        message=message,
        model_name=model_name,
        record_id="" if record_id is None else str(record_id),
        before=before,
        after=after,
        ip_address=ip_address[:64],
    )
    logger.debug("audit %s actor=%s record=%s", action, entry.actor_id, record_id)
    return entry
