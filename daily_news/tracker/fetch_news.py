"""
Sync diário standalone: busca as três fontes para a data de hoje (UTC)
e atualiza o cache. Pensado para cron: código de saída 1 em erro fatal.
"""
import sys
from typing import Optional

from daily_news.storage.repository import NewsCacheRepository
from daily_news.tracker.news_tracker import NewsTracker
from daily_news.utils.tz_utils import today_str


def run(tracker: Optional[NewsTracker] = None, date: Optional[str] = None) -> int:
    print("--- Starting News Sync ---")
    try:
        date = date or today_str()
        print(f"[INFO] Date: {date}")
        tracker = tracker or NewsTracker(NewsCacheRepository())
        bundle = tracker.get_news(date)
        print("--- News Sync Completed Successfully ---")
        print(f"Global: {len(bundle.global_)}, Tech/Local: {len(bundle.tech)}, AI/Viral: {len(bundle.ai)}")
        return 0
    except Exception as e:
        print(f"[ERROR] FATAL: {e!r}")
        return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
