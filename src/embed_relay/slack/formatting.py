"""Conversion of Slack mrkdwn message text back to plain text."""

import re

# Matches Slack mrkdwn URL format: <https://example.com> or <https://example.com|label>
# Does NOT match user refs <@U123>, channel refs <#C123>, or special mentions <!here>
SLACK_URL_PATTERN = re.compile(r"<(https?://[^|>]+)(?:\|[^>]*)?>")

# Slack escapes only these three characters in message text
_ENTITIES = (("&lt;", "<"), ("&gt;", ">"), ("&amp;", "&"))


def unwrap_links(text: str) -> str:
    """Replace <url> and <url|label> markup with the bare URL and unescape entities.

    Entities are unescaped after unwrapping so an escaped ``&lt;`` in user
    text is never mistaken for link markup.
    """
    unwrapped = SLACK_URL_PATTERN.sub(lambda m: m.group(1), text)
    for entity, char in _ENTITIES:
        unwrapped = unwrapped.replace(entity, char)
    return unwrapped
