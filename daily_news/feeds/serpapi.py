import requests
from typing import Dict, Optional
from requests.adapters import HTTPAdapter
from .base import BaseFeed
from daily_news import config

# ---------- HTTP session global com pool, sem retry (uma tentativa por fonte) ----------
_SESSION = requests.Session()
_ADAPTER = HTTPAdapter(pool_connections=10, pool_maxsize=10, max_retries=0)
_SESSION.mount("https://", _ADAPTER)
_SESSION.headers.update({"User-Agent": "DailyNews/1.0 (+https://localhost)"})


class SerpApiFeed(BaseFeed):
    BASE_URL = "https://serpapi.com/search.json"
    TIMEOUT = 30
    ENGINE = ""
    QUERY_PARAM = "q"

    def __init__(self, query: str, api_key: Optional[str] = None):
        self.query: str = query
        self.api_key: str = api_key if api_key is not None else config.SERP_API_KEY

    def _params(self) -> Dict[str, str]:
        return {
            "engine": self.ENGINE,
            self.QUERY_PARAM: self.query,
            "api_key": self.api_key,
        }

    def fetch(self) -> Optional[Dict]:
        try:
            response = _SESSION.get(self.BASE_URL, params=self._params(), timeout=self.TIMEOUT)
        except requests.RequestException as e:
            # nunca logar a URL completa (contém api_key)
            print(f"[ERROR] Fetch failed for '{self.query}': {e.__class__.__name__}")
            return None

        try:
            payload = response.json()
        except ValueError:
            print(f"[ERROR] JSON parse failed for '{self.query}' (HTTP {response.status_code})")
            return None

        if not isinstance(payload, dict):
            print(f"[ERROR] Unexpected payload for '{self.query}': {type(payload).__name__}")
            return None
        if payload.get("error"):
            print(f"[ERROR] SerpApi error for '{self.query}': {payload['error']}")
            return None
        if not response.ok:
            print(f"[ERROR] HTTP {response.status_code} for '{self.query}'")
            return None
        return payload


class GoogleNewsFeed(SerpApiFeed):
    ENGINE = "google_news"
    RESULTS_KEY = "news_results"
    REGION_CONFIG = {
        "MY": {"gl": "my", "hl": "en"},
        "US": {"gl": "us", "hl": "en"},
        "GB": {"gl": "uk", "hl": "en"},
        "BR": {"gl": "br", "hl": "pt-br"},
    }

    def __init__(self, query: str, region: Optional[str] = None, api_key: Optional[str] = None):
        super().__init__(query, api_key)
        self.region: Optional[str] = region.upper() if region else None

    def _params(self) -> Dict[str, str]:
        params = super()._params()
        if self.region:
            params.update(self.REGION_CONFIG.get(self.region, {"gl": self.region.lower()}))
        return params


class YouTubeFeed(SerpApiFeed):
    ENGINE = "youtube"
    QUERY_PARAM = "search_query"
    RESULTS_KEY = "video_results"
