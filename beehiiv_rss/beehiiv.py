"""Client for the Beehiiv posts API."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.beehiiv.com/v2"


class UpstreamError(RuntimeError):
    """Raised when the Beehiiv API returns something we cannot use."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def build_posts_url(publication_id: str) -> str:
    return f"{API_BASE_URL}/publications/{publication_id}/posts"


def fetch_posts(
    api_key: str,
    publication_id: str,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> List[Any]:
    """Fetch the first page of posts for a publication.

    Only the ``data`` list of the response is returned; it is empty when the
    field is absent. Non-2xx responses raise :class:`UpstreamError` carrying
    the status code and the response body.
    """
    url = build_posts_url(publication_id)
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }
    client = session if session is not None else requests

    logger.info("Fetching posts from Beehiiv API...")
    response = client.get(url, headers=headers, timeout=timeout)

    if not 200 <= response.status_code < 300:
        error_text = response.text
        logger.error("Beehiiv API Error: %s", error_text)
        raise UpstreamError(
            f"Beehiiv API responded with status: {response.status_code} - {error_text}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise UpstreamError(f"Beehiiv API returned invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise UpstreamError("Beehiiv API response must be a JSON object.")

    posts = payload.get("data") or []
    if not isinstance(posts, list):
        raise UpstreamError("Beehiiv API response field 'data' must be a list.")

    logger.info("Successfully fetched %d posts", len(posts))
    return posts
