"""Tests for posting relayed links back into Slack.

post_reply must be fire-and-forget: it catches SlackApiError and logs, never
allowing a failed post to propagate.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from slack_sdk.errors import SlackApiError

from embed_relay.models.message import ReplyTarget
from embed_relay.slack.replies import post_reply

CHANNEL = "C0AFQJHAVS6"
TS = "1234567890.123456"
EMBED = "https://www.vxtiktok.com/@u/video/42"


def _make_slack_api_error(error_code: str) -> SlackApiError:
    """Build a SlackApiError with a mock response carrying the given error code."""
    resp = MagicMock()
    resp.get = MagicMock(
        side_effect=lambda key, default="": error_code if key == "error" else default,
    )
    resp.__getitem__ = MagicMock(
        side_effect=lambda key: error_code if key == "error" else None,
    )
    return SlackApiError(message=f"slack error: {error_code}", response=resp)


@pytest.fixture()
def mock_client():
    """Patch get_slack_client to return an AsyncMock Slack client."""
    client = AsyncMock()
    with patch("embed_relay.slack.replies.get_slack_client", new_callable=AsyncMock) as m:
        m.return_value = client
        yield client


async def test_post_reply_to_channel(mock_client: AsyncMock):
    """A reply to a top-level message is posted into the channel."""
    posted = await post_reply(ReplyTarget(channel_id=CHANNEL), EMBED)

    assert posted is True
    mock_client.chat_postMessage.assert_called_once_with(
        channel=CHANNEL, thread_ts=None, text=EMBED, unfurl_links=True
    )


async def test_post_reply_in_thread(mock_client: AsyncMock):
    """A reply to a threaded message stays in the thread."""
    await post_reply(ReplyTarget(channel_id=CHANNEL, thread_ts=TS), EMBED)

    call_kwargs = mock_client.chat_postMessage.call_args.kwargs
    assert call_kwargs["thread_ts"] == TS


async def test_post_reply_handles_api_error(mock_client: AsyncMock):
    """SlackApiError is swallowed and reported as not posted."""
    mock_client.chat_postMessage.side_effect = _make_slack_api_error("channel_not_found")

    posted = await post_reply(ReplyTarget(channel_id=CHANNEL), EMBED)

    assert posted is False


async def test_post_reply_handles_not_in_channel(mock_client: AsyncMock):
    mock_client.chat_postMessage.side_effect = _make_slack_api_error("not_in_channel")

    assert await post_reply(ReplyTarget(channel_id=CHANNEL), EMBED) is False


async def test_post_reply_handles_transport_timeout(mock_client: AsyncMock):
    """A timed-out post is reported as not posted, not raised."""
    mock_client.chat_postMessage.side_effect = TimeoutError()

    assert await post_reply(ReplyTarget(channel_id=CHANNEL), EMBED) is False


# -- Cached client on the reply path --


def _mock_settings(token: str = "xoxb-test") -> MagicMock:
    settings = MagicMock()
    settings.slack_bot_token = token
    settings.reply_timeout_seconds = 7
    return settings


@patch("embed_relay.slack.client.AsyncWebClient")
@patch("embed_relay.slack.client.get_settings")
async def test_replies_share_one_configured_client(
    mock_get_settings: MagicMock, mock_client_cls: MagicMock
):
    """Every reply goes through a single client built with the bot token and reply timeout."""
    mock_get_settings.return_value = _mock_settings()
    web_client = MagicMock()
    web_client.chat_postMessage = AsyncMock()
    mock_client_cls.return_value = web_client

    await post_reply(ReplyTarget(channel_id=CHANNEL), EMBED)
    await post_reply(ReplyTarget(channel_id=CHANNEL, thread_ts=TS), EMBED)

    mock_client_cls.assert_called_once_with(token="xoxb-test", timeout=7)
    assert web_client.chat_postMessage.await_count == 2


@patch("embed_relay.slack.client.get_settings")
async def test_reply_client_is_real_async_web_client(mock_get_settings: MagicMock):
    """Without patches the cached client is a slack_sdk AsyncWebClient."""
    from slack_sdk.web.async_client import AsyncWebClient

    from embed_relay.slack.client import get_slack_client

    mock_get_settings.return_value = _mock_settings()

    client = await get_slack_client()

    assert isinstance(client, AsyncWebClient)
    assert client.timeout == 7
