"""Shared helpers for provider HTTP calls."""

import logging

import httpx

from tododash.errors import ProviderError, ProviderUnavailableError

logger = logging.getLogger(__name__)

_MESSAGE_KEYS = ("msg", "error_description", "message", "error")


def error_message(response: httpx.Response, default: str) -> str:
    """Pull a human readable message out of a provider error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or default
    if isinstance(body, dict):
        for key in _MESSAGE_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return default


async def send(
    http: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    unavailable: str,
    **kwargs,
) -> httpx.Response:
    """Send a request, turning transport failures and error statuses into ProviderError."""
    try:
        response = await http.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        logger.warning("%s %s failed: %r", method, url, e)
        raise ProviderUnavailableError(unavailable) from e
    if response.is_error:
        message = error_message(response, unavailable)
        logger.info("%s %s returned %d: %s", method, url, response.status_code, message)
        raise ProviderError(message)
    return response
