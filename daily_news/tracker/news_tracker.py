import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from daily_news import config
from daily_news.feeds import BaseFeed, GoogleNewsFeed, YouTubeFeed
from daily_news.normalizer import normalize_results
from daily_news.storage.models import BUCKETS, NewsBundle
from daily_news.storage.repository import NewsCacheRepository


@dataclass
class BucketSource:
    feed: BaseFeed
    labels: Sequence[str]
    cap: int = 10


def default_sources(api_key: Optional[str] = None) -> Dict[str, BucketSource]:
    cap = config.ITEMS_PER_BUCKET
    return {
        "global": BucketSource(
            GoogleNewsFeed("top 10 global news breaking", api_key=api_key),
            ("BREAKING", "WORLD", "POLITICS"), cap,
        ),
        "tech": BucketSource(
            GoogleNewsFeed("top 10 Malaysia top viral news latest", region="MY", api_key=api_key),
            ("MALAYSIA", "VIRAL", "LOCAL"), cap,
        ),
        "ai": BucketSource(
            YouTubeFeed("latest most viral video", api_key=api_key),
            ("VIRAL", "YOUTUBE", "TRENDING"), cap,
        ),
    }


class NewsTracker:
    """Serve o bundle do cache ou roda as três fontes, normaliza e grava a data."""

    def __init__(
        self,
        repository: NewsCacheRepository,
        sources: Optional[Dict[str, BucketSource]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.repository = repository
        self.sources: Dict[str, BucketSource] = sources if sources is not None else default_sources()
        self.rng = rng or random.Random()

    def _fetch_all(self) -> Dict[str, List[Dict]]:
        raw: Dict[str, List[Dict]] = {bucket: [] for bucket in BUCKETS}
        if not self.sources:
            return raw

        # Fontes independentes: falha em uma não cancela as outras
        with ThreadPoolExecutor(max_workers=len(self.sources)) as ex:
            futures = {ex.submit(src.feed.fetch_results): bucket for bucket, src in self.sources.items()}
            for fut in as_completed(futures):
                bucket = futures[fut]
                try:
                    raw[bucket] = fut.result() or []
                except Exception as e:
                    print(f"[ERROR] Feed failed for bucket '{bucket}': {e}")
                    raw[bucket] = []
        return raw

    def refresh(self, date: str) -> NewsBundle:
        raw = self._fetch_all()
        buckets = {}
        for bucket in BUCKETS:
            src = self.sources.get(bucket)
            buckets[bucket] = normalize_results(raw[bucket], src.labels, src.cap, self.rng) if src else []
        bundle = NewsBundle.model_validate(buckets)
        self.repository.put(date, bundle)
        print(f"[INFO] {date} synced: global={len(bundle.global_)} tech={len(bundle.tech)} ai={len(bundle.ai)}")
        return bundle

    def get_news(self, date: str, force_refresh: bool = False) -> NewsBundle:
        if not force_refresh:
            cached = self.repository.get(date)
            if cached is not None:
                return cached
        return self.refresh(date)
