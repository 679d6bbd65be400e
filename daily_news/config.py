import os
from typing import Optional
from dotenv import load_dotenv

# Carrega variáveis do .env
load_dotenv(override=True)


def _env_int(key: str, default: int, minimum: Optional[int] = None) -> int:
    try:
        value = int(os.getenv(key, str(default)))
    except (ValueError, TypeError):
        return default
    if minimum is not None and value < minimum:
        return default
    return value


SERP_API_KEY = os.getenv("SERP_API_KEY", "")

NEWS_CACHE_PATH = os.getenv(
    "NEWS_CACHE_PATH",
    os.path.join(os.path.dirname(__file__), "storage", "data", "news-cache.json"),
)

SYNC_HOUR_UTC = _env_int("SYNC_HOUR_UTC", 6)        # horário do sync diário (UTC)
SYNC_MINUTE_UTC = _env_int("SYNC_MINUTE_UTC", 0)
ITEMS_PER_BUCKET = _env_int("ITEMS_PER_BUCKET", 10, minimum=1)
FEED_PAGE_SIZE = _env_int("FEED_PAGE_SIZE", 3, minimum=1)

NEWS_API_BASE_URL = os.getenv("NEWS_API_BASE_URL", "http://localhost:8000")
