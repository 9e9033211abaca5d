"""Link handling: detection, classification, redirect resolution, and host rewriting."""

from embed_relay.links.client import close_http_client, get_http_client, reset_client
from embed_relay.links.matcher import classify_url, extract_urls, is_long_url, is_short_url
from embed_relay.links.resolver import resolve_short_url
from embed_relay.links.rewriter import rewrite_host

__all__ = [
    "classify_url",
    "close_http_client",
    "extract_urls",
    "get_http_client",
    "is_long_url",
    "is_short_url",
    "reset_client",
    "resolve_short_url",
    "rewrite_host",
]
