"""Host rewriting from canonical TikTok URLs to the embed-friendly mirror."""

from embed_relay.links.matcher import CANONICAL_HOST

EMBED_HOST = "www.vxtiktok.com"

_CANONICAL_PREFIX = f"https://{CANONICAL_HOST}"
_EMBED_PREFIX = f"https://{EMBED_HOST}"


def rewrite_host(url: str) -> str:
    """Swap the first canonical TikTok host for the embed host.

    Path and query are left untouched. URLs without the canonical host
    (including already rewritten ones) are returned unchanged.
    """
    return url.replace(_CANONICAL_PREFIX, _EMBED_PREFIX, 1)
