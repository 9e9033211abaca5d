"""Slack events webhook."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse

from embed_relay.slack.handlers import handle_slack_event
from embed_relay.slack.verification import verify_slack_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["slack"])


@router.post("/slack/events")
async def slack_events(
    request: Request,
    background_tasks: BackgroundTasks,
    payload: dict = Depends(verify_slack_request),
) -> JSONResponse:
    """Acknowledge a Slack event and relay any links in the background.

    Slack redelivers an event it thinks timed out. The first delivery already
    scheduled the relay, so a redelivery is acknowledged and dropped rather
    than posting every embed link a second time.
    """
    retry_num = request.headers.get("X-Slack-Retry-Num")
    if retry_num:
        logger.info(
            "Dropping redelivered event %s (retry %s, reason %s)",
            payload.get("event_id"),
            retry_num,
            request.headers.get("X-Slack-Retry-Reason", "unknown"),
        )
        return JSONResponse({"ok": True})

    return handle_slack_event(payload, background_tasks)
