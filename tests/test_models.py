from beehiiv_rss.models import FeedConfig, PostRecord


def test_post_record_reads_nested_free_web_content():
    record = PostRecord.from_dict(
        {
            "id": "post_1",
            "status": "confirmed",
            "publish_date": 1700000000,
            "web_url": "https://news.example.com/p/one",
            "title": "One",
            "subtitle": "Sub",
            "content": {"free": {"web": "<p>Body</p>"}},
        }
    )

    assert record.id == "post_1"
    assert record.publish_date == 1700000000
    assert record.content_html == "<p>Body</p>"


def test_post_record_tolerates_missing_and_malformed_fields():
    record = PostRecord.from_dict({"id": 7, "content": {"free": "not-a-dict"}})

    assert record.id == "7"
    assert record.status is None
    assert record.web_url is None
    assert record.content_html is None


def test_post_record_from_non_mapping_is_empty():
    assert PostRecord.from_dict(None) == PostRecord()
    assert PostRecord.from_dict(["unexpected"]) == PostRecord()


def test_feed_config_defaults():
    config = FeedConfig()

    assert config.title == "Your Newsletter"
    assert config.description == "Latest posts from your newsletter"
    assert config.feed_url == "https://your-site.com"
    assert config.author_email == "your-email@domain.com"


def test_post_record_drops_non_string_text_fields():
    record = PostRecord.from_dict(
        {
            "id": "x",
            "status": ["confirmed"],
            "web_url": 42,
            "title": {"text": "nested"},
            "subtitle": 3.5,
            "content": {"free": {"web": {"html": "<p>x</p>"}}},
        }
    )

    assert record.status is None
    assert record.web_url is None
    assert record.title is None
    assert record.subtitle is None
    assert record.content_html is None
