"""Shared httpx client for short-link probing.

Created lazily from application settings and reused across messages. Redirects
are not followed, so a short link's destination is read from the ``location``
header of its first response. The timeout keeps a hung host from holding a
concurrency slot forever.
"""

import httpx

from embed_relay.config import get_settings

_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Return the cached AsyncClient, creating it on first call."""
    global _client
    if _client is None:
        settings = get_settings()
        _client = httpx.AsyncClient(
            follow_redirects=False,
            timeout=httpx.Timeout(settings.resolve_timeout_seconds),
            headers={"User-Agent": settings.user_agent},
        )
    return _client


async def close_http_client() -> None:
    """Close and drop the cached client. Called on application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


def reset_client() -> None:
    """Reset the cached client instance. Used for testing."""
    global _client
    _client = None
