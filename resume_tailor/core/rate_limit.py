from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_tailor.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Per-client limit for a route; ``RATE_LIMIT`` unless ``limit`` is given."""
    if not settings.rate_limit_enabled:
        return lambda func: func
    return limiter.limit(limit or settings.rate_limit)


def tailor_rate_limit():
    # tailoring may call the model backend, so it gets the tighter budget
    return rate_limit(settings.tailor_rate_limit)
