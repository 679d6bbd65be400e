"""
Controlador do feed do cliente: carrega o bundle de uma data, pagina as colunas
no scroll e cai para o dataset fixo quando o servidor falha.

Todo o estado fica em FeedState (sem globais); as funções de render recebem o
estado por referência e devolvem ColumnView, então dá para testar sem navegador.

Uso:
    controller = FeedController(NewsApiClient("http://localhost:8000"))
    controller.load("2026-10-19")
    controller.scroll_near_bottom("global")
    controller.sync()                      # força refresh da data selecionada
"""

import math
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from daily_news import config
from daily_news.client.api_client import NewsApiClient, NewsApiError
from daily_news.client.fallback import get_sample_news
from daily_news.storage.models import BUCKETS, NewsBundle, NewsItem
from daily_news.utils.tz_utils import iso_to_clock_str, today_str

# "ai" sempre renderiza tudo de uma vez
UNPAGINATED_BUCKETS = frozenset({"ai"})

CATEGORY_CLASSES = {
    "BREAKING": "breaking",
    "POLITICS": "politics",
    "ECONOMY": "economy",
    "TECH": "tech",
    "LIVE STREAM": "live",
    "SYNTHETIC MEDIA": "synthetic",
    "AI": "ai",
    "WORLD": "world",
}

LOADING_TEXT = "Loading intelligence..."
EMPTY_TEXT = "NO DATA ARCHIVED"

GAUGE_MIN, GAUGE_MAX = 70.0, 99.0


@dataclass
class PageCursor:
    page: int = 1
    limit: int = 3


@dataclass
class NewsCard:
    category: str
    category_class: str
    headline: str
    time_caption: str
    viral_score: float
    viral_class: str
    url: str
    thumbnail: Optional[str] = None
    description: Optional[str] = None


@dataclass
class ColumnView:
    bucket: str
    status: str  # "loading", "empty" ou "items"
    cards: List[NewsCard] = field(default_factory=list)
    count_text: str = ""
    total: int = 0
    message: str = ""


@dataclass
class FeedState:
    selected_date: str
    page_size: int = 3
    bundle: Optional[NewsBundle] = None
    pagination: Dict[str, PageCursor] = field(default_factory=dict)
    columns: Dict[str, ColumnView] = field(default_factory=dict)
    available_dates: List[str] = field(default_factory=list)
    loading: bool = False
    connected: Optional[bool] = None  # None até o primeiro load terminar
    generation: int = 0
    velocity: float = 85.0

    def __post_init__(self):
        if not self.pagination:
            self.reset_pagination()

    def reset_pagination(self):
        self.pagination = {bucket: PageCursor(1, self.page_size) for bucket in BUCKETS}

    def items(self, bucket: str) -> List[NewsItem]:
        return self.bundle.bucket(bucket) if self.bundle else []


def category_class(category: str) -> str:
    return CATEGORY_CLASSES.get(category, "tech")


def viral_class(score: float) -> str:
    if score >= 9:
        return "high"
    if score >= 7:
        return "medium"
    return ""


def count_text(bucket: str, total: int) -> str:
    if bucket == "ai":
        return f"TRENDING: {total}"
    if bucket == "tech":
        return f"{total:02d} LOCAL"
    return f"{total} REPORTS"


def make_card(item: NewsItem) -> NewsCard:
    return NewsCard(
        category=item.category,
        category_class=category_class(item.category),
        headline=item.headline,
        # views têm prioridade sobre o horário no cabeçalho do card
        time_caption=f"{item.viewers} WATCHING" if item.viewers else iso_to_clock_str(item.timestamp),
        viral_score=item.viral_score,
        viral_class=viral_class(item.viral_score),
        url=item.url or "#",
        thumbnail=item.thumbnail,
        description=item.description,
    )


def visible_count(state: FeedState, bucket: str) -> int:
    total = len(state.items(bucket))
    if bucket in UNPAGINATED_BUCKETS:
        return total
    cursor = state.pagination[bucket]
    return min(total, cursor.page * cursor.limit)


def render_loading(bucket: str) -> ColumnView:
    return ColumnView(bucket=bucket, status="loading", message=LOADING_TEXT)


def render_column(state: FeedState, bucket: str) -> ColumnView:
    items = state.items(bucket)
    if not items:
        return ColumnView(bucket=bucket, status="empty", count_text=count_text(bucket, 0), message=EMPTY_TEXT)
    visible = items[:visible_count(state, bucket)]
    return ColumnView(
        bucket=bucket,
        status="items",
        cards=[make_card(item) for item in visible],
        count_text=count_text(bucket, len(items)),
        total=len(items),
    )


class FeedController:
    def __init__(
        self,
        api: NewsApiClient,
        page_size: Optional[int] = None,
        fallback: Optional[Callable[[], NewsBundle]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.api = api
        self.fallback = fallback or get_sample_news
        self.rng = rng or random.Random()
        if not page_size or page_size < 1:
            page_size = config.FEED_PAGE_SIZE
        self.state = FeedState(selected_date=today_str(), page_size=page_size)

    # ---------- Load ----------
    def begin_load(self, date: Optional[str] = None) -> int:
        """Entra em loading e devolve o número da requisição (generation)."""
        self.state.selected_date = date or self.state.selected_date or today_str()
        self.state.generation += 1
        self.state.loading = True
        self.state.columns = {bucket: render_loading(bucket) for bucket in BUCKETS}
        return self.state.generation

    def complete_load(self, generation: int, bundle: Optional[NewsBundle]) -> bool:
        """Aplica a resposta só se for da requisição mais recente. None = falha."""
        if generation != self.state.generation:
            print(f"[INFO] Discarding stale response #{generation} (latest is #{self.state.generation})")
            return False

        self.state.loading = False
        if bundle is None:
            self.state.connected = False
            bundle = self.fallback()
        else:
            self.state.connected = True
            self.set_gauge(85 + self.rng.random() * 15)

        self.state.bundle = bundle
        self.state.reset_pagination()
        self.render_all()
        return True

    def load(self, date: Optional[str] = None, force_refresh: bool = False) -> bool:
        generation = self.begin_load(date)
        try:
            bundle = self.api.fetch_bundle(self.state.selected_date, refresh=force_refresh)
        except NewsApiError as e:
            print(f"[ERROR] Failed to load news: {e}")
            bundle = None
        return self.complete_load(generation, bundle)

    def sync(self) -> bool:
        return self.load(self.state.selected_date, force_refresh=True)

    def load_available_dates(self) -> List[str]:
        try:
            dates = self.api.fetch_dates()
        except NewsApiError as e:
            print(f"[ERROR] Failed to load historical dates: {e}")
            dates = []
        self.state.available_dates = dates or [today_str()]
        return self.state.available_dates

    # ---------- Render / scroll ----------
    def render(self, bucket: str) -> ColumnView:
        view = render_column(self.state, bucket)
        self.state.columns[bucket] = view
        return view

    def render_all(self) -> Dict[str, ColumnView]:
        for bucket in BUCKETS:
            self.render(bucket)
        return self.state.columns

    def scroll_near_bottom(self, bucket: str) -> bool:
        """Avança uma página da coluna. Retorna False quando não há o que anexar."""
        if bucket in UNPAGINATED_BUCKETS:
            return False
        total = len(self.state.items(bucket))
        cursor = self.state.pagination[bucket]
        total_pages = math.ceil(total / cursor.limit) or 1
        if cursor.page >= total_pages:
            return False
        cursor.page += 1
        self.render(bucket)
        return True

    # ---------- Medidor decorativo ----------
    def set_gauge(self, value: float) -> float:
        self.state.velocity = value
        return value

    def tick_gauge(self) -> float:
        nudged = self.state.velocity + (self.rng.random() - 0.5) * 5
        return self.set_gauge(max(GAUGE_MIN, min(GAUGE_MAX, nudged)))
