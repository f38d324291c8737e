import pytest

from beehiiv_rss.models import FeedConfig


@pytest.fixture
def feed_config():
    return FeedConfig(
        title="Weekly Notes",
        description="Posts from the weekly newsletter",
        feed_url="https://example.com",
        author_email="editor@example.com",
    )


@pytest.fixture
def base_env():
    """A complete environment for handler and config tests."""
    return {
        "BEEHIIV_API_KEY": "test-key",
        "BEEHIIV_PUBLICATION_ID": "pub_123",
        "FEED_TITLE": "Weekly Notes",
        "FEED_DESCRIPTION": "Posts from the weekly newsletter",
        "FEED_URL": "https://example.com",
        "AUTHOR_EMAIL": "editor@example.com",
    }
