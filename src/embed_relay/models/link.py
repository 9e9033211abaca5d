"""Link classification enum."""

from enum import Enum


class LinkKind(str, Enum):
    """How a URL candidate relates to the relayed video platform."""

    SHORT = "short"  # vm.tiktok.com redirect link
    LONG = "long"  # canonical www.tiktok.com/@user/video/<id>
    UNRELATED = "unrelated"
