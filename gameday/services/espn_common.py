# gameday/services/espn_common.py

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional

import httpx

from gameday.core.config import HEADERS, HTTP_TIMEOUT, HTTP_TRIES, local_now, local_tz

logger = logging.getLogger("gameday.espn_common")

RETRY_BACKOFF = 0.35


def build_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=HTTP_TIMEOUT, headers=HEADERS, transport=transport)


# -----------------------------------------------------------
# Shared HTTP helper with retries
# -----------------------------------------------------------
async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    max_tries: int = HTTP_TRIES,
) -> Dict[str, Any]:
    """
    ESPN JSON fetch with basic retry + logging.

    Raises the last httpx.HTTPError (transport failure or non-2xx) or
    ValueError (body isn't a JSON object) once every attempt has failed.
    """
    last: Optional[Exception] = None

    for attempt in range(1, max_tries + 1):
        try:
            r = await client.get(url, params=params)
            r.raise_for_status()
            data = r.json()
            if not isinstance(data, dict):
                raise ValueError(f"expected JSON object, got {type(data).__name__}")
            return data
        except (httpx.HTTPError, ValueError) as e:
            last = e
            logger.warning("get_json %s attempt %s failed: %r", url, attempt, e)
            if attempt < max_tries:
                await asyncio.sleep(RETRY_BACKOFF * attempt)

    logger.error("get_json %s giving up after %s attempts: %r", url, max_tries, last)
    raise last or RuntimeError("unknown http error")


# -----------------------------------------------------------
# Date helpers (local calendar, never UTC)
# -----------------------------------------------------------
def today_local() -> date:
    return local_now().date()


def coerce_date(date_str: Optional[str]) -> date:
    """
    Accepts:
      - None / ''      -> today in the local zone
      - 'YYYYMMDD'
      - 'YYYY-MM-DD'
    Raises ValueError on other inputs.
    """
    if not date_str:
        return today_local()
    ds = date_str.strip()
    if len(ds) == 10 and ds[4] == "-" and ds[7] == "-":
        return datetime.strptime(ds, "%Y-%m-%d").date()
    if len(ds) == 8 and ds.isdigit():
        return datetime.strptime(ds, "%Y%m%d").date()
    raise ValueError("date must be YYYYMMDD (or YYYY-MM-DD)")


def yyyymmdd(day: date) -> str:
    return day.strftime("%Y%m%d")


def parse_kickoff(raw: Any) -> Optional[datetime]:
    """ESPN ISO timestamp ('2024-09-08T17:00Z') -> aware datetime, or None."""
    if not isinstance(raw, str) or not raw:
        return None
    try:
        dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        return None
    return dt


def local_date_of(ts: datetime) -> date:
    tz = local_tz()
    return (ts.astimezone(tz) if tz else ts.astimezone()).date()


def local_time_label(ts: datetime) -> str:
    tz = local_tz()
    local = ts.astimezone(tz) if tz else ts.astimezone()
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"


def relative_day_label(day: date, today: Optional[date] = None) -> str:
    today = today or today_local()
    if day == today:
        return "Today"
    if day == today + timedelta(days=1):
        return "Tomorrow"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return f"{day.strftime('%a, %b')} {day.day}"
