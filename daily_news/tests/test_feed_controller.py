# daily_news/tests/test_feed_controller.py
import random
import pytest

from daily_news.client import FeedController, NewsApiError, get_sample_news
from daily_news.client.feed_controller import count_text, make_card, viral_class
from daily_news.storage.models import NewsBundle, NewsItem


def _items(n, prefix="N", **extra):
    return [{"category": "WORLD", "headline": f"{prefix}{i}", "timestamp": "2026-10-19T08:05:00+00:00",
             "viralScore": 9.0, **extra} for i in range(n)]


def _bundle(g=7, t=4, a=5, prefix="N"):
    return NewsBundle.model_validate({"global": _items(g, prefix), "tech": _items(t, prefix), "ai": _items(a, prefix)})


class FakeApi:
    def __init__(self, bundle=None, error=False, dates=None):
        self.bundle = bundle
        self.error = error
        self.dates = dates
        self.calls = []

    def fetch_bundle(self, date, refresh=False):
        self.calls.append((date, refresh))
        if self.error:
            raise NewsApiError("HTTP 500")
        return self.bundle

    def fetch_dates(self):
        if self.dates is None:
            raise NewsApiError("offline")
        return self.dates


def _headlines(view):
    return [c.headline for c in view.cards]


def test_pagination_seven_items_page_size_three():
    ctl = FeedController(FakeApi(_bundle(g=7)), page_size=3, rng=random.Random(0))
    ctl.load("2026-10-19")

    assert _headlines(ctl.state.columns["global"]) == ["N0", "N1", "N2"]
    assert ctl.scroll_near_bottom("global") is True
    assert len(ctl.state.columns["global"].cards) == 6
    assert ctl.scroll_near_bottom("global") is True
    assert len(ctl.state.columns["global"].cards) == 7
    assert ctl.scroll_near_bottom("global") is False
    assert len(ctl.state.columns["global"].cards) == 7
    assert ctl.state.pagination["global"].page == 3


def test_ai_bucket_is_never_paginated():
    ctl = FeedController(FakeApi(_bundle(a=5)), page_size=3)
    ctl.load("2026-10-19")
    assert len(ctl.state.columns["ai"].cards) == 5
    assert ctl.scroll_near_bottom("ai") is False
    assert ctl.state.pagination["ai"].page == 1


def test_buckets_paginate_independently():
    ctl = FeedController(FakeApi(_bundle(g=7, t=4)), page_size=3)
    ctl.load("2026-10-19")
    ctl.scroll_near_bottom("tech")
    assert len(ctl.state.columns["tech"].cards) == 4
    assert len(ctl.state.columns["global"].cards) == 3


def test_empty_bucket_renders_placeholder():
    ctl = FeedController(FakeApi(_bundle(g=0)), page_size=3)
    ctl.load("2026-10-19")
    view = ctl.state.columns["global"]
    assert view.status == "empty"
    assert view.cards == []
    assert view.message == "NO DATA ARCHIVED"
    assert ctl.scroll_near_bottom("global") is False


def test_failure_shows_fallback_and_disconnected_then_success_replaces_it():
    api = FakeApi(error=True)
    ctl = FeedController(api, page_size=3)
    ctl.load("2026-10-19")

    assert ctl.state.connected is False
    assert ctl.state.loading is False
    assert ctl.state.bundle.to_json()["tech"][0]["headline"] == get_sample_news().tech[0].headline
    ctl.scroll_near_bottom("global")
    assert ctl.state.pagination["global"].page == 2

    api.error = False
    api.bundle = _bundle(g=7, prefix="Live")
    ctl.load("2026-10-19")

    assert ctl.state.connected is True
    assert _headlines(ctl.state.columns["global"]) == ["Live0", "Live1", "Live2"]
    assert all(c.page == 1 for c in ctl.state.pagination.values())


def test_begin_load_shows_loading_columns():
    ctl = FeedController(FakeApi(_bundle()))
    ctl.begin_load("2026-10-19")
    assert ctl.state.loading is True
    assert {v.status for v in ctl.state.columns.values()} == {"loading"}


def test_stale_response_is_discarded():
    ctl = FeedController(FakeApi())
    first = ctl.begin_load("2026-10-18")
    second = ctl.begin_load("2026-10-19")

    assert ctl.complete_load(second, _bundle(prefix="New")) is True
    assert ctl.complete_load(first, _bundle(prefix="Old")) is False

    assert ctl.state.selected_date == "2026-10-19"
    assert _headlines(ctl.state.columns["global"])[0] == "New0"


def test_stale_failure_does_not_flip_connectivity():
    ctl = FeedController(FakeApi())
    first = ctl.begin_load("2026-10-18")
    second = ctl.begin_load("2026-10-19")
    ctl.complete_load(second, _bundle())
    ctl.complete_load(first, None)
    assert ctl.state.connected is True


def test_sync_forces_refresh_for_selected_date():
    api = FakeApi(_bundle())
    ctl = FeedController(api)
    ctl.load("2026-10-17")
    ctl.sync()
    assert api.calls == [("2026-10-17", False), ("2026-10-17", True)]


def test_load_without_date_keeps_selected_date():
    api = FakeApi(_bundle())
    ctl = FeedController(api)
    ctl.load("2026-10-17")
    ctl.load()
    assert api.calls[-1] == ("2026-10-17", False)


def test_available_dates_fall_back_to_today():
    ctl = FeedController(FakeApi(dates=None))
    assert ctl.load_available_dates() == [ctl.state.selected_date]
    ctl = FeedController(FakeApi(dates=["2026-10-18", "2026-10-19"]))
    assert ctl.load_available_dates() == ["2026-10-18", "2026-10-19"]


def test_gauge_tick_stays_in_bounds():
    ctl = FeedController(FakeApi(), rng=random.Random(3))
    for _ in range(500):
        value = ctl.tick_gauge()
        assert 70 <= value <= 99
    ctl.set_gauge(99)
    assert ctl.tick_gauge() <= 99


def test_gauge_does_not_touch_data_state():
    ctl = FeedController(FakeApi(_bundle()))
    ctl.load("2026-10-19")
    before = ctl.state.bundle.to_json()
    ctl.tick_gauge()
    assert ctl.state.bundle.to_json() == before


@pytest.mark.parametrize("bucket,total,expected", [
    ("global", 10, "10 REPORTS"), ("tech", 4, "04 LOCAL"), ("ai", 3, "TRENDING: 3"), ("tech", 0, "00 LOCAL"),
])
def test_count_text(bucket, total, expected):
    assert count_text(bucket, total) == expected


def test_card_caption_and_classes():
    with_views = NewsItem(category="LIVE STREAM", headline="h", timestamp="2026-10-19T08:05:00Z",
                          viralScore=9.9, viewers="22.4K")
    card = make_card(with_views)
    assert card.time_caption == "22.4K WATCHING"
    assert card.category_class == "live"
    assert card.viral_class == "high"

    plain = NewsItem(category="SOMETHING", headline="h", timestamp="2026-10-19T08:05:00+00:00", viralScore=7.5)
    card = make_card(plain)
    assert card.time_caption == "08:05 UTC"
    assert card.category_class == "tech"
    assert card.viral_class == "medium"
    assert viral_class(3.0) == ""
    assert viral_class(12.4) == "high"
    assert viral_class(-0.3) == ""


def test_live_provider_date_gets_clock_caption():
    from daily_news.normalizer import normalize_results
    item = normalize_results([{"title": "x", "date": "11/19/2024, 08:00 AM, +0000 UTC"}], ("WORLD",))[0]
    assert make_card(item).time_caption == "08:00 UTC"


@pytest.mark.parametrize("page_size", [0, -2])
def test_non_positive_page_size_falls_back_to_default(page_size):
    from daily_news import config
    ctl = FeedController(FakeApi(_bundle(g=7)), page_size=page_size)
    ctl.load("2026-10-19")
    assert ctl.state.pagination["global"].limit == config.FEED_PAGE_SIZE
    assert ctl.scroll_near_bottom("global") is True
