import time
from datetime import date as Date
from typing import Optional
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from apscheduler.schedulers.background import BackgroundScheduler
from contextlib import asynccontextmanager

from daily_news import config
from daily_news.storage.repository import NewsCacheRepository
from daily_news.tracker.news_tracker import NewsTracker
from daily_news.utils.tz_utils import today_str


repository = NewsCacheRepository()
tracker = NewsTracker(repository)

# Scheduler com configurações para evitar empilhamento de jobs
scheduler = BackgroundScheduler(
    timezone="UTC",
    job_defaults={
        "coalesce": True,          # junta execuções atrasadas
        "max_instances": 1,        # não roda dois iguais ao mesmo tempo
        "misfire_grace_time": 300,
    },
)


def daily_sync():
    """Sync agendado: mesmo fluxo do on-demand, sem forçar refresh."""
    date = today_str()
    try:
        bundle = tracker.get_news(date)
        print(f"[INFO] Daily sync for {date} done ({len(bundle.global_) + len(bundle.tech) + len(bundle.ai)} items).")
    except Exception as e:
        print(f"[ERROR] Daily sync for {date} failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler.add_job(
        daily_sync, "cron",
        hour=config.SYNC_HOUR_UTC, minute=config.SYNC_MINUTE_UTC,
        id="daily_news_sync",
    )
    scheduler.start()
    yield
    scheduler.shutdown(wait=False)


#%% APP

app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Compressão gzip para reduzir payloads de /api/news
app.add_middleware(GZipMiddleware, minimum_size=512)


@app.get("/health")
def health():
    return {"status": "ok", "ts": int(time.time())}


@app.get("/api/news")
def get_news(date: Optional[Date] = None, refresh: bool = Query(False)):
    key = date.isoformat() if date else today_str()
    bundle = tracker.get_news(key, force_refresh=refresh)
    return bundle.to_json()


@app.get("/api/news/dates")
def get_news_dates():
    return repository.dates()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("daily_news.api.main:app", host="0.0.0.0", port=8000, reload=True)
