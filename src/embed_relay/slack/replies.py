"""Posting relayed links back into Slack.

Replies are fire-and-forget: API and transport errors are logged and reported
as a False return, never raised, so one failed post cannot stop the others.
"""

import logging

import aiohttp
from slack_sdk.errors import SlackApiError

from embed_relay.models.message import ReplyTarget
from embed_relay.slack.client import get_slack_client

logger = logging.getLogger(__name__)


async def post_reply(reply_to: ReplyTarget, text: str) -> bool:
    """Post ``text`` into the channel (and thread) the original message came from.

    Link unfurling is requested explicitly so the embed preview renders.
    Returns True when Slack accepted the message.
    """
    try:
        client = await get_slack_client()
        await client.chat_postMessage(
            channel=reply_to.channel_id,
            thread_ts=reply_to.thread_ts,
            text=text,
            unfurl_links=True,
        )
    except SlackApiError as exc:
        error_code = exc.response.get("error", "") if exc.response else ""
        logger.warning(
            "Failed to post reply to %s (%s): %s",
            reply_to.channel_id,
            error_code,
            text,
            exc_info=True,
        )
        return False
    except (aiohttp.ClientError, TimeoutError) as exc:
        logger.warning(
            "Transport error posting reply to %s: %s (%s)", reply_to.channel_id, text, exc
        )
        return False
    return True
