"""Liveness endpoint for load balancers and the ops dashboard.

The database and the Redis broker are required; the LLM assistant is reported
for visibility only, since every assistant feature degrades to a no-op.
"""

from __future__ import annotations

from typing import Any

import redis
from django.conf import settings
from django.db import connection
from django.http import JsonResponse

from idea_hub.integrations.llm.client import get_llm_client_from_settings


def check_db() -> dict[str, Any]:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except Exception as exc:  # noqa: BLE001 - health must degrade, not crash
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


def check_broker() -> dict[str, Any]:
    url = getattr(settings, "REDIS_URL", None)
    if not url:
        return {"ok": False, "error": "REDIS_URL not configured"}
    try:
        redis.Redis.from_url(
            url, socket_timeout=0.5, socket_connect_timeout=0.5
        ).ping()
    except Exception as exc:  # noqa: BLE001 - health must degrade, not crash
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


def describe_assistant() -> dict[str, Any]:
    client = get_llm_client_from_settings()
    if client is None:
        return {"enabled": False}
    return {"enabled": True, "provider": settings.LLM_PROVIDER}


def health(request):
    required = {"db": check_db(), "redis": check_broker()}
    healthy = [c["ok"] for c in required.values()]
    if all(healthy):
        state = "ok"
    elif any(healthy):
        state = "degraded"
    else:
        state = "down"
    return JsonResponse(
        {
            "status": state,
            "components": {**required, "llm": describe_assistant()},
        },
        status=200 if state == "ok" else 503,
    )
