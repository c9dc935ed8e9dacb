"""Health check endpoints for production monitoring."""

import os
import time
from typing import Any, Dict

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse
from django.utils import timezone

from acme.env_validation import get_env_status

APP_VERSION = os.environ.get("APP_VERSION", "1.0.0")
APP_START_TIME = time.time()


def _get_uptime_formatted() -> Dict[str, Any]:
    """Get uptime in human-readable format and raw seconds."""
    uptime_seconds = int(time.time() - APP_START_TIME)
    days, remainder = divmod(uptime_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")

    return {"seconds": uptime_seconds, "formatted": " ".join(parts)}


def _no_cache(response: JsonResponse) -> JsonResponse:
    # Health status is never cached
    response["Cache-Control"] = "no-cache, no-store, must-revalidate, max-age=0"
    response["Pragma"] = "no-cache"
    return response


def health_check(request):
    """
    Basic health check endpoint for load balancers.
    Returns 200 if the application is running.
    For orchestration use /health/ready/ or /health/live/ instead.
    """
    return _no_cache(JsonResponse(
        {
            "status": "healthy",
            "version": APP_VERSION,
            "environment": "production" if not settings.DEBUG else "development",
            "timestamp": timezone.now().isoformat(),
            "uptime": _get_uptime_formatted(),
            "environment_status": get_env_status(),
        }
    ))


def liveness_check(request):
    """Liveness check; answers without touching the database."""
    start = time.perf_counter()
    response_data = {
        "status": "alive",
        "timestamp": timezone.now().isoformat(),
        "uptime": _get_uptime_formatted(),
        "version": APP_VERSION,
    }
    response_data["response_time_ms"] = round((time.perf_counter() - start) * 1000, 2)
    return _no_cache(JsonResponse(response_data))


def readiness_check(request):
    """Readiness check - runs a trivial query against the database."""
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except OperationalError:
        return _no_cache(JsonResponse({"status": "not_ready", "database": "down"}, status=503))
    return _no_cache(JsonResponse({"status": "ready", "database": "up"}))
