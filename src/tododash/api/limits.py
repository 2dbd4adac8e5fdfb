"""Rate limiting shared by all routers."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from tododash.config import get_settings

limiter = Limiter(key_func=get_remote_address)

_UNLIMITED = "1000000/minute"  # Effectively unlimited when disabled


def default_limit() -> str:
    """Get the default rate limit from settings."""
    settings = get_settings()
    return settings.rate_limit_default if settings.rate_limit_enabled else _UNLIMITED


def upload_limit() -> str:
    settings = get_settings()
    return settings.rate_limit_uploads if settings.rate_limit_enabled else _UNLIMITED


def auth_limit() -> str:
    settings = get_settings()
    return settings.rate_limit_auth if settings.rate_limit_enabled else _UNLIMITED
