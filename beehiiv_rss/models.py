"""Shared data models for beehiiv_rss."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

DEFAULT_FEED_TITLE = "Your Newsletter"
DEFAULT_FEED_DESCRIPTION = "Latest posts from your newsletter"
DEFAULT_FEED_URL = "https://your-site.com"
DEFAULT_AUTHOR_EMAIL = "your-email@domain.com"


@dataclass(frozen=True)
class FeedConfig:
    """Channel-level values used to render one feed."""

    title: str = DEFAULT_FEED_TITLE
    description: str = DEFAULT_FEED_DESCRIPTION
    feed_url: str = DEFAULT_FEED_URL
    author_email: str = DEFAULT_AUTHOR_EMAIL


def _nested(value: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass
class PostRecord:
    """The subset of a Beehiiv post that the feed consumes."""

    id: Optional[str] = None
    status: Optional[str] = None
    publish_date: Optional[Union[int, float, str]] = None
    web_url: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content_html: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "PostRecord":
        if not isinstance(raw, Mapping):
            return cls()
        post_id = raw.get("id")
        return cls(
            id=None if post_id is None else str(post_id),
            status=_text(raw.get("status")),
            publish_date=raw.get("publish_date"),
            web_url=_text(raw.get("web_url")),
            title=_text(raw.get("title")),
            subtitle=_text(raw.get("subtitle")),
            content_html=_text(_nested(raw, "content", "free", "web")),
        )


@dataclass
class RssItem:
    """A single <item> prior to escaping."""

    title: str
    link: str
    guid: str
    pub_date: str
    author: str
    description: str
