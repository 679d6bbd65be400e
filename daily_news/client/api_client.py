import requests
from typing import List, Optional

from daily_news import config
from daily_news.storage.models import NewsBundle


class NewsApiError(Exception):
    """Falha de rede ou resposta não-2xx ao buscar dados do servidor."""


class NewsApiClient:
    TIMEOUT = 15

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url: str = (base_url or config.NEWS_API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()

    def _get_json(self, path: str, params: Optional[dict] = None):
        try:
            response = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.TIMEOUT)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise NewsApiError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            raise NewsApiError(f"GET {path} returned invalid JSON") from e

    def fetch_bundle(self, date: str, refresh: bool = False) -> NewsBundle:
        params = {"date": date}
        if refresh:
            params["refresh"] = "true"
        data = self._get_json("/api/news", params)
        try:
            return NewsBundle.model_validate(data)
        except ValueError as e:
            raise NewsApiError(f"Unexpected bundle shape for {date}") from e

    def fetch_dates(self) -> List[str]:
        data = self._get_json("/api/news/dates")
        if not isinstance(data, list):
            raise NewsApiError("Unexpected dates payload")
        return [str(d) for d in data]
