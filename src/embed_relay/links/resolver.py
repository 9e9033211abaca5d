"""Short-link redirect resolution.

A vm.tiktok.com link answers a HEAD request with a redirect to the canonical
www.tiktok.com/@user/video/<id> page. The resolver reads that destination
without fetching any body, and hands back the rewritten embed URL.

Resolution is best-effort: every failure is logged and turned into ``None`` so
one bad link never disturbs the rest of a message.
"""

import asyncio
import logging

import httpx

from embed_relay.config import get_settings
from embed_relay.links.client import get_http_client
from embed_relay.links.matcher import is_long_url, is_short_url
from embed_relay.links.rewriter import rewrite_host

logger = logging.getLogger(__name__)

_ABSOLUTE_PREFIXES = ("http://", "https://")


async def resolve_short_url(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout_seconds: float | None = None,
) -> str | None:
    """Resolve a short link and return its rewritten canonical URL.

    The whole probe runs under one wall-clock deadline (``timeout_seconds``,
    default ``resolve_timeout_seconds``); the client's own timeout only bounds
    each phase. The response's own URL is checked first (covers clients that
    follow redirects), then the ``location`` header. Returns None when the URL
    is not a short link, the probe fails or runs out of time, or neither
    candidate is a canonical video URL.
    """
    if not is_short_url(url):
        return None

    if client is None:
        client = get_http_client()
    if timeout_seconds is None:
        timeout_seconds = get_settings().resolve_timeout_seconds

    try:
        async with asyncio.timeout(timeout_seconds):
            response = await client.head(url)
    except TimeoutError:
        logger.warning("Probe of short URL %s exceeded %.1fs", url, timeout_seconds)
        return None
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Failed to probe short URL %s: %s", url, exc)
        return None

    final_url = str(response.url)
    if is_long_url(final_url):
        return rewrite_host(final_url)

    location = _redirect_target(response)
    if location is None:
        logger.info(
            "No usable redirect for %s (status %d)", url, response.status_code
        )
        return None

    if not is_long_url(location):
        logger.info("Short URL %s redirects to non-video URL %s", url, location)
        return None

    return rewrite_host(location)


def _redirect_target(response: httpx.Response) -> str | None:
    """Return the absolute ``location`` header value, or None if unusable.

    The raw header bytes must be valid UTF-8. Absolute targets (scheme matched
    case-insensitively) are returned verbatim, so an upper-case scheme fails
    the canonical-URL check later. Relative ones are joined onto the response URL.
    """
    for name, value in response.headers.raw:
        if name.lower() != b"location":
            continue
        try:
            location = value.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Undecodable location header from %s", response.url)
            return None
        if location.lower().startswith(_ABSOLUTE_PREFIXES):
            return location
        try:
            return str(response.url.join(location))
        except httpx.InvalidURL:
            logger.warning("Invalid location header from %s: %r", response.url, location)
            return None
    return None
