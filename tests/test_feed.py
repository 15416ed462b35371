import pytest

from subpar.feed import FEED_BASE_URL, Feed


def test_numbered_feed_uses_base_url():
    feed = Feed.from_static("1234567")
    assert feed.url == "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs"
    assert feed.name() == "1234567"


@pytest.mark.parametrize("name", ["ace", "bdfm", "g", "jz", "nqrw", "l", "si"])
def test_lettered_feeds_append_suffix(name):
    feed = Feed.from_static(name)
    assert feed.url == f"{FEED_BASE_URL}-{name}"
    assert feed.name() == name


def test_unknown_feed_rejected():
    with pytest.raises(ValueError, match="unrecognized feed"):
        Feed.from_static("xyz")


def test_display_pads_label():
    text = str(Feed.from_static("l"))
    assert text.startswith("F.l")
    assert len(text) == len("F.") + 7


def test_display_long_label_not_truncated():
    assert str(Feed.from_static("1234567")) == "F.1234567"


def test_repr_matches_str():
    feed = Feed.from_static("g")
    assert repr(feed) == str(feed)


def test_custom_feed():
    feed = Feed("mine", "https://example.com/feed")
    assert feed.name() == "mine"
    assert feed.url == "https://example.com/feed"


def test_bad_url_rejected():
    with pytest.raises(ValueError):
        Feed("mine", "not a url")


def test_feeds_compare_by_value():
    assert Feed.from_static("ace") == Feed.from_static("ace")
    assert Feed.from_static("ace") != Feed.from_static("g")