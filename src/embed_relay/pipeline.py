"""Per-message relay pipeline: extract, classify, resolve, rewrite, reply.

Every URL candidate in a message gets its own task. At most ``max_concurrency``
of them run their resolve/reply sequence at once; the rest wait on a semaphore.
Each candidate is independent -- one failure does not affect the others.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from embed_relay.config import get_settings
from embed_relay.links.matcher import classify_url, extract_urls
from embed_relay.links.resolver import resolve_short_url
from embed_relay.links.rewriter import rewrite_host
from embed_relay.models.link import LinkKind
from embed_relay.models.message import InboundMessage, ReplyTarget

logger = logging.getLogger(__name__)

# send_reply(target, text) -> True if the reply was posted
ReplySender = Callable[[ReplyTarget, str], Awaitable[bool]]


async def process_message(
    message: InboundMessage,
    send_reply: ReplySender,
    *,
    client: httpx.AsyncClient | None = None,
    max_concurrency: int | None = None,
) -> list[str]:
    """Relay embed links for every TikTok URL in a message.

    Returns the rewritten URLs that were posted successfully. Completion order
    is not tied to the order links appear in the message.
    """
    if message.author_is_automated:
        return []

    candidates = extract_urls(message.text)
    if not candidates:
        return []

    if max_concurrency is None:
        max_concurrency = get_settings().max_concurrency
    semaphore = asyncio.Semaphore(max_concurrency)

    results = await asyncio.gather(
        *[
            _process_candidate(url, message.reply_to, send_reply, semaphore, client)
            for url in candidates
        ],
        return_exceptions=True,
    )

    sent: list[str] = []
    for url, result in zip(candidates, results):
        if isinstance(result, BaseException):
            logger.error("Relay failed for %s", url, exc_info=result)
        elif result is not None:
            sent.append(result)
    return sent


async def _process_candidate(
    url: str,
    reply_to: ReplyTarget,
    send_reply: ReplySender,
    semaphore: asyncio.Semaphore,
    client: httpx.AsyncClient | None,
) -> str | None:
    """Classify one candidate, resolve or rewrite it, and post the reply.

    Returns the posted URL, or None when nothing was posted.
    """
    async with semaphore:
        kind = classify_url(url)
        if kind == LinkKind.SHORT:
            rewritten = await resolve_short_url(url, client)
        elif kind == LinkKind.LONG:
            rewritten = rewrite_host(url)
        else:
            return None

        if rewritten is None:
            return None

        try:
            posted = await send_reply(reply_to, rewritten)
        except Exception:
            logger.warning("Reply failed for %s", rewritten, exc_info=True)
            return None

        if not posted:
            logger.warning("Reply not posted for %s", rewritten)
            return None

        logger.info("Relayed %s -> %s", url, rewritten)
        return rewritten
