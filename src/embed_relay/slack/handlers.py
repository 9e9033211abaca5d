"""Slack event dispatch and message filtering logic."""

import logging

from fastapi import BackgroundTasks
from fastapi.responses import JSONResponse

from embed_relay.links.matcher import extract_urls
from embed_relay.models.message import InboundMessage, ReplyTarget
from embed_relay.pipeline import process_message
from embed_relay.slack.formatting import unwrap_links
from embed_relay.slack.replies import post_reply

logger = logging.getLogger(__name__)

# Subtypes that carry new message text; bot_message is kept so it is marked automated
_RELAYED_SUBTYPES = {None, "bot_message", "file_share", "thread_broadcast"}


def handle_slack_event(payload: dict, background_tasks: BackgroundTasks) -> JSONResponse:
    """Dispatch a Slack event based on its type.

    - url_verification: return the challenge token
    - event_callback: process the contained event
    - anything else: acknowledge with 200
    """
    if payload.get("type") == "url_verification":
        return JSONResponse({"challenge": payload["challenge"]})

    if payload.get("type") == "event_callback":
        event = payload.get("event", {})
        handle_message_event(event, background_tasks)
        return JSONResponse({"ok": True})

    return JSONResponse({"ok": True})


def handle_message_event(event: dict, background_tasks: BackgroundTasks) -> None:
    """Apply message filters and dispatch link relaying to background.

    Filters are applied in order:
    1. Not a message event -> skip
    2. Edits, deletions, joins and other non-content subtypes -> skip
    3. Automated author (bot_id or bot_message subtype) -> skip
    4. No URLs -> skip
    """
    if event.get("type") != "message":
        return

    subtype = event.get("subtype")
    if subtype not in _RELAYED_SUBTYPES:
        return

    message = InboundMessage(
        author_is_automated=bool(event.get("bot_id")) or subtype == "bot_message",
        text=unwrap_links(event.get("text", "")),
        reply_to=ReplyTarget(
            channel_id=event.get("channel", ""),
            thread_ts=event.get("thread_ts"),
        ),
    )

    if message.author_is_automated:
        return

    if not extract_urls(message.text):
        return

    logger.info(
        "Dispatching message from user %s in channel %s",
        event.get("user"),
        message.reply_to.channel_id,
    )
    background_tasks.add_task(relay_message, message)


async def relay_message(message: InboundMessage) -> None:
    """Run the relay pipeline for one message, posting replies through Slack."""
    sent = await process_message(message, post_reply)
    logger.info(
        "Relayed %d link(s) in channel %s",
        len(sent),
        message.reply_to.channel_id,
    )
