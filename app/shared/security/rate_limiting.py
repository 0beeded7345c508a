"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-endpoint rate limits.
Exceeded limits raise RateLimitExceeded, an HTTP 429 exception that the
shared error boundary renders like any other transport exception.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
