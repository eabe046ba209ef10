"""Rate limiting for write endpoints using SlowAPI.

The dashboard is a single-tenant proxy, so limits are keyed on client IP.
Storage defaults to in-process memory; point ``RATE_LIMIT_STORAGE_URI`` at
Redis when running more than one worker.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from dashboard.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[f"{settings.rate_limit_general_per_minute}/minute"],
    headers_enabled=False,
    enabled=settings.rate_limit_enabled,
)


def rate_limit_write():
    """Decorator for record and comment mutations."""
    return limiter.limit(f"{settings.rate_limit_write_per_minute}/minute")


def rate_limit_upload():
    """Decorator for the file upload endpoint (each call makes several Notion requests)."""
    return limiter.limit(f"{settings.rate_limit_upload_per_minute}/minute")
