from .api_client import NewsApiClient, NewsApiError
from .feed_controller import FeedController, FeedState, PageCursor, ColumnView, NewsCard
from .fallback import get_sample_news

__all__ = [
    "NewsApiClient", "NewsApiError",
    "FeedController", "FeedState", "PageCursor", "ColumnView", "NewsCard",
    "get_sample_news",
]
