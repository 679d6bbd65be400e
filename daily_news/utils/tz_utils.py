from datetime import datetime, timezone
from typing import Optional

DEFAULT_TIMEZONE = timezone.utc


def today_str(now: Optional[datetime] = None) -> str:
    """Data de hoje (UTC) no formato YYYY-MM-DD, usada como chave do cache."""
    now = now or datetime.now(DEFAULT_TIMEZONE)
    return now.astimezone(DEFAULT_TIMEZONE).date().isoformat()


def iso_to_clock_str(iso_ts: str) -> str:
    """Converte string ISO para 'HH:MM UTC'. Vazio ou inválido -> ''."""
    if not iso_ts:
        return ""
    try:
        dt = datetime.fromisoformat(iso_ts.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return ""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=DEFAULT_TIMEZONE)
    return dt.astimezone(DEFAULT_TIMEZONE).strftime("%H:%M UTC")
