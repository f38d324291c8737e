"""RSS rendering for Beehiiv posts."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Iterable, List, Optional, Sequence, Union

from .models import FeedConfig, PostRecord, RssItem
from .templating import get_environment

logger = logging.getLogger(__name__)

PUBLISHED_STATUS = "confirmed"
MAX_ITEMS = 20
UNTITLED = "Untitled Post"
LANGUAGE = "en-us"
GENERATOR = "Beehiiv to Squarespace RSS Generator"
TTL_MINUTES = 60

_SCRIPT_BLOCK = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
_STYLE_BLOCK = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)


def strip_dangerous_blocks(html: Optional[str]) -> str:
    """Remove <script> and <style> blocks; all other markup is kept as is."""
    if not html:
        return ""
    cleaned = _SCRIPT_BLOCK.sub("", html)
    return _STYLE_BLOCK.sub("", cleaned)


def format_http_date(value: datetime) -> str:
    """Format a datetime as an RFC 1123 date in GMT."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def parse_publish_date(value: Union[int, float, str, None]) -> Optional[datetime]:
    """Interpret a Beehiiv publish date (Unix seconds or ISO-8601)."""
    if not value or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                return datetime.fromtimestamp(float(text), tz=timezone.utc)
            except ValueError:
                pass
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
    except (ValueError, OverflowError, OSError):
        logger.debug("Ignoring unparseable publish date %r", value)
    return None


def _as_record(post: Any) -> PostRecord:
    if isinstance(post, PostRecord):
        return post
    return PostRecord.from_dict(post)


def select_published_posts(
    posts: Iterable[Any], limit: int = MAX_ITEMS
) -> List[PostRecord]:
    """Keep confirmed posts in upstream order, capped at ``limit``."""
    selected: List[PostRecord] = []
    for post in posts:
        record = _as_record(post)
        if record.status != PUBLISHED_STATUS:
            continue
        selected.append(record)
        if len(selected) >= limit:
            break
    return selected


def build_items(
    posts: Sequence[PostRecord], config: FeedConfig, now: datetime
) -> List[RssItem]:
    """Map published posts to feed items."""
    fallback_date = format_http_date(now)
    items: List[RssItem] = []
    for post in posts:
        published = parse_publish_date(post.publish_date)
        pub_date = format_http_date(published) if published else fallback_date
        link = post.web_url or f"{config.feed_url}/post/{post.id or ''}"
        content = strip_dangerous_blocks(post.content_html or post.subtitle or "")
        items.append(
            RssItem(
                title=post.title or UNTITLED,
                link=link,
                guid=link,
                pub_date=pub_date,
                author=config.author_email,
                description=content,
            )
        )
    return items


def render_feed(
    posts: Iterable[Any], config: FeedConfig, now: Optional[datetime] = None
) -> str:
    """Render an RSS 2.0 document for ``posts``.

    ``posts`` may hold raw API dicts or :class:`PostRecord` instances. The
    clock is read once, so lastBuildDate and every defaulted pubDate agree.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    selected = select_published_posts(posts)
    items = build_items(selected, config, now)
    logger.debug("Rendering feed with %d items", len(items))

    template = get_environment().get_template("rss.xml.j2")
    return template.render(
        feed=config,
        items=items,
        build_date=format_http_date(now),
        language=LANGUAGE,
        generator=GENERATOR,
        ttl=TTL_MINUTES,
    )
