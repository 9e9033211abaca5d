"""URL detection and TikTok link classification for free-form message text."""

import re
import string

from embed_relay.models.link import LinkKind

SHORT_HOST = "vm.tiktok.com"
CANONICAL_HOST = "www.tiktok.com"

_ASCII_PUNCTUATION = re.escape(string.punctuation)

# Generic http(s) URL. The last character must be a balanced "(word)" group,
# a slash, or anything but ASCII punctuation, so sentence punctuation after a
# link is left out while ".../Foo_(bar)" stays whole.
URL_PATTERN = re.compile(
    rf"\bhttps?://[^\s()<>]+(?:\(\w+\)|[^{_ASCII_PUNCTUATION}\s]|/)"
)

# Whole-string match: https://vm.tiktok.com/<anything>
SHORT_URL_PATTERN = re.compile(rf"https://{re.escape(SHORT_HOST)}/.+")

# Prefix match: https://www.tiktok.com/@<user>/video/<digits>[...]
LONG_URL_PATTERN = re.compile(rf"https://{re.escape(CANONICAL_HOST)}/@[^/]+/video/[0-9]+")


def extract_urls(text: str) -> list[str]:
    """Extract every http(s) URL in ``text``, in order of appearance.

    Duplicates are preserved. Text without links yields an empty list.
    """
    return [match.group(0) for match in URL_PATTERN.finditer(text)]


def is_short_url(url: str) -> bool:
    """Return True if ``url`` is a vm.tiktok.com short link."""
    return SHORT_URL_PATTERN.fullmatch(url) is not None


def is_long_url(url: str) -> bool:
    """Return True if ``url`` starts with a canonical TikTok video URL."""
    return LONG_URL_PATTERN.match(url) is not None


def classify_url(url: str) -> LinkKind:
    """Classify a URL candidate as a short link, canonical link, or unrelated.

    Both predicates are checked on their own; a URL that matches neither is
    UNRELATED.
    """
    if is_short_url(url):
        return LinkKind.SHORT
    if is_long_url(url):
        return LinkKind.LONG
    return LinkKind.UNRELATED
