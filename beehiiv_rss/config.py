"""Configuration loading for the feed endpoint."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional
from xml.etree import ElementTree as ET

from .models import (
    DEFAULT_AUTHOR_EMAIL,
    DEFAULT_FEED_DESCRIPTION,
    DEFAULT_FEED_TITLE,
    DEFAULT_FEED_URL,
    FeedConfig,
)

logger = logging.getLogger(__name__)

API_KEY_VAR = "BEEHIIV_API_KEY"
PUBLICATION_ID_VAR = "BEEHIIV_PUBLICATION_ID"


class ConfigurationError(ValueError):
    """Raised when required environment values are missing."""


@dataclass(frozen=True)
class Settings:
    """Everything a single request needs, resolved from the environment."""

    api_key: str
    publication_id: str
    feed: FeedConfig


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Resolve settings from ``environ`` (defaults to the process environment)."""
    if environ is None:
        environ = os.environ

    api_key = environ.get(API_KEY_VAR)
    publication_id = environ.get(PUBLICATION_ID_VAR)
    if not api_key or not publication_id:
        raise ConfigurationError(
            f"{API_KEY_VAR} and {PUBLICATION_ID_VAR} must be set in the "
            "deployment environment"
        )

    feed = FeedConfig(
        title=environ.get("FEED_TITLE") or DEFAULT_FEED_TITLE,
        description=environ.get("FEED_DESCRIPTION") or DEFAULT_FEED_DESCRIPTION,
        feed_url=environ.get("FEED_URL") or DEFAULT_FEED_URL,
        author_email=environ.get("AUTHOR_EMAIL") or DEFAULT_AUTHOR_EMAIL,
    )
    return Settings(api_key=api_key, publication_id=publication_id, feed=feed)


def parse_env_config(path: Optional[str]) -> Dict[str, str]:
    """Parse environment variables from XML."""
    env_vars: Dict[str, str] = {}
    if not path:
        return env_vars

    logger.info("Loading environment configuration from %s", path)
    try:
        tree = ET.parse(path)
        root = tree.getroot()
        for var in root.findall("variable"):
            name = var.attrib.get("name")
            value = var.text
            if name and value:
                env_vars[name] = value.strip()
    except (OSError, ET.ParseError) as exc:
        logger.warning("Failed to load environment config: %s", exc)
        raise

    return env_vars
