"""
Normalização: lista crua de um provedor (SerpApi) -> lista de NewsItem.

- Mantém só os N primeiros itens (a ordem do provedor é o ranking).
- Categoria por posição, em rodízio sobre a lista de labels do bucket.
- viralScore = 9.9 - 0.8*i + jitter em [0, 0.5), arredondado em 1 casa.
  É heurística de exibição, não métrica; o gerador aleatório é injetável.
"""

import math
import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from daily_news.storage.models import NewsItem

DEFAULT_CAP = 10
PLACEHOLDER_HEADLINE = "News Update"
UNKNOWN_SOURCE = "Unknown"

_TOP_SCORE = 9.9
_SCORE_STEP = 0.8
_JITTER = 0.5

# formato de "date" do google_news na SerpApi: "11/19/2024, 08:00 AM, +0000 UTC"
_SERPAPI_DATE_FORMAT = "%m/%d/%Y, %I:%M %p, %z UTC"


def base_score(index: int) -> float:
    return _TOP_SCORE - index * _SCORE_STEP


def format_viewers(views: Any) -> Optional[str]:
    """22400 -> '22.4K'. Sem contagem (ou zero/inválida) -> None."""
    if views is None or isinstance(views, bool):
        return None
    try:
        count = float(str(views).replace(",", ""))
    except ValueError:
        return None
    if not math.isfinite(count) or count <= 0:
        return None
    return f"{count / 1000:.1f}K"


def to_iso_timestamp(value: Any) -> Optional[str]:
    """Data da SerpApi ou ISO-8601 -> ISO-8601 (naive vira UTC). Irreconhecível -> None."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        dt = datetime.strptime(text, _SERPAPI_DATE_FORMAT)
    except ValueError:
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def _name_of(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return value.get("name") or None
    if isinstance(value, str):
        return value or None
    return None


def _thumbnail_of(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return value.get("static") or None
    if isinstance(value, str):
        return value or None
    return None


def _normalize_item(item: Dict, index: int, labels: Sequence[str], rng) -> NewsItem:
    viral_score = round(base_score(index) + rng.random() * _JITTER, 1)
    return NewsItem(
        category=labels[index % len(labels)],
        headline=str(item.get("title") or item.get("snippet") or PLACEHOLDER_HEADLINE),
        timestamp=(
            to_iso_timestamp(item.get("date"))
            or to_iso_timestamp(item.get("published_date"))
            or datetime.now(timezone.utc).isoformat()
        ),
        viral_score=viral_score,
        url=str(item.get("link") or "#"),
        source=_name_of(item.get("source")) or _name_of(item.get("channel")) or UNKNOWN_SOURCE,
        viewers=format_viewers(item.get("views")),
        thumbnail=_thumbnail_of(item.get("thumbnail")),
    )


def normalize_results(
    results: Optional[List[Any]],
    labels: Sequence[str],
    cap: int = DEFAULT_CAP,
    rng: Optional[random.Random] = None,
) -> List[NewsItem]:
    if not results:
        return []
    if not labels:
        raise ValueError("labels must not be empty")
    rng = rng or random.Random()

    news: List[NewsItem] = []
    for index, item in enumerate(results[:max(cap, 0)]):
        news.append(_normalize_item(item if isinstance(item, dict) else {}, index, labels, rng))
    return news
