"""Request handling for the RSS endpoint."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

import requests

from .beehiiv import fetch_posts
from .config import ConfigurationError, load_settings
from .renderers import render_feed

logger = logging.getLogger(__name__)

RSS_CONTENT_TYPE = "application/rss+xml; charset=utf-8"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"
CACHE_CONTROL = "public, s-maxage=3600, stale-while-revalidate=86400"


@dataclass
class HttpResponse:
    """Status, headers and body produced for one request."""

    status: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def json_error(cls, payload: Dict[str, Any], status: int = 500) -> "HttpResponse":
        return cls(
            status=status,
            body=json.dumps(payload),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def handle_request(
    environ: Optional[Mapping[str, str]] = None,
    session: Optional[requests.Session] = None,
) -> HttpResponse:
    """Build the feed response for a single request.

    The inbound request itself carries nothing the feed depends on, so only
    the environment is consulted.
    """
    try:
        settings = load_settings(environ)
    except ConfigurationError as exc:
        logger.error("Missing required environment variables: %s", exc)
        return HttpResponse.json_error(
            {"error": "Missing required environment variables", "details": str(exc)}
        )

    try:
        posts = fetch_posts(settings.api_key, settings.publication_id, session=session)
        rss_xml = render_feed(posts, settings.feed)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error generating RSS feed")
        return HttpResponse.json_error(
            {
                "error": "Failed to generate RSS feed",
                "details": str(exc),
                "timestamp": _utc_timestamp(),
            }
        )

    return HttpResponse(
        status=200,
        body=rss_xml,
        headers={"Content-Type": RSS_CONTENT_TYPE, "Cache-Control": CACHE_CONTROL},
    )
