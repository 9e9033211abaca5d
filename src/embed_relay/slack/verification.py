"""Signed-request guard for the Slack events webhook."""

import json
import logging

from fastapi import HTTPException, Request
from slack_sdk.signature import SignatureVerifier

from embed_relay.config import get_settings

logger = logging.getLogger(__name__)


async def verify_slack_request(request: Request) -> dict:
    """FastAPI dependency returning the JSON event envelope of a signed request.

    The signature is checked against the raw body before it is parsed.
    A body that is not UTF-8 is rejected with 400 before verification, a bad
    signature with 403, and a signed body that is not a JSON object with 400.
    """
    raw = await request.body()
    try:
        body = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Rejected Slack request with non UTF-8 body")
        raise HTTPException(status_code=400, detail="Request body is not UTF-8")

    verifier = SignatureVerifier(signing_secret=get_settings().slack_signing_secret)
    if not verifier.is_valid(
        body=body,
        timestamp=request.headers.get("X-Slack-Request-Timestamp", ""),
        signature=request.headers.get("X-Slack-Signature", ""),
    ):
        raise HTTPException(status_code=403, detail="Invalid Slack signature")

    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        logger.warning("Rejected signed Slack request with malformed JSON")
        raise HTTPException(status_code=400, detail="Malformed JSON payload")

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Payload must be a JSON object")
    return payload
