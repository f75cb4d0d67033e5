"""Middleware modules."""

from taskboard.middleware.auth import token_required
from taskboard.middleware.metrics import register_metrics_middleware


__all__ = ["token_required", "register_metrics_middleware"]
