# daily_news/tests/conftest.py
import random
import pytest

from daily_news.feeds.base import BaseFeed


class StubFeed(BaseFeed):
    """Feed sem rede: devolve um payload fixo (ou None) e conta as chamadas."""
    RESULTS_KEY = "news_results"

    def __init__(self, results=None, fail=False, boom=False):
        self.results = results or []
        self.fail = fail
        self.boom = boom
        self.calls = 0

    def fetch(self):
        self.calls += 1
        if self.boom:
            raise RuntimeError("unexpected")
        if self.fail:
            return None
        return {self.RESULTS_KEY: list(self.results)}


def make_results(n, prefix="Story"):
    return [
        {"title": f"{prefix} {i}", "link": f"http://x/{prefix.lower()}/{i}",
         "date": "2026-10-19T08:00:00+00:00", "source": {"name": "Wire"}}
        for i in range(n)
    ]


@pytest.fixture()
def cache_path(tmp_path):
    return str(tmp_path / "news-cache.json")


@pytest.fixture()
def repository(cache_path):
    from daily_news.storage.repository import NewsCacheRepository
    return NewsCacheRepository(cache_path)


@pytest.fixture()
def stub_feeds():
    return {
        "global": StubFeed(make_results(12, "Global")),
        "tech": StubFeed(make_results(4, "Local")),
        "ai": StubFeed(make_results(2, "Video")),
    }


@pytest.fixture()
def tracker(repository, stub_feeds):
    from daily_news.tracker.news_tracker import BucketSource, NewsTracker
    sources = {
        "global": BucketSource(stub_feeds["global"], ("BREAKING", "WORLD", "POLITICS")),
        "tech": BucketSource(stub_feeds["tech"], ("MALAYSIA", "VIRAL", "LOCAL")),
        "ai": BucketSource(stub_feeds["ai"], ("VIRAL", "YOUTUBE", "TRENDING")),
    }
    return NewsTracker(repository, sources, rng=random.Random(7))


@pytest.fixture()
def app(monkeypatch, repository, tracker):
    # Patches para impedir network/scheduler no startup
    from daily_news.api import main as api_main

    monkeypatch.setattr(api_main, "repository", repository, raising=True)
    monkeypatch.setattr(api_main, "tracker", tracker, raising=True)

    class DummyScheduler:
        def __init__(self):
            self.jobs = []
        def add_job(self, *a, **k): self.jobs.append((a, k))
        def start(self): pass
        def shutdown(self, wait=False): pass
    monkeypatch.setattr(api_main, "scheduler", DummyScheduler(), raising=True)

    return api_main.app


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c
