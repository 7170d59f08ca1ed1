"""Structured logging helpers (no credentials, no request bodies)."""

from typing import Any


def build_log_context(
    *,
    user_id: str | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
    status: int | None = None,
    duration_ms: int | None = None,
) -> dict[str, Any]:
    """Return a log context dict for `extra=`; unset values are left out."""
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = user_id
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    if status is not None:
        context["status"] = status
    if duration_ms is not None:
        context["duration_ms"] = duration_ms
    return context
