"""Serverless entry point: the platform routes /api/rss to ``handler``."""

import logging

from beehiiv_rss.cli import configure_logging
from beehiiv_rss.server import FeedRequestHandler

# Keep whatever logging the hosting runtime already installed.
if not logging.getLogger().handlers:
    configure_logging("INFO")

handler = FeedRequestHandler
