# gameday/core/config.py
from __future__ import annotations

import logging
import os
from datetime import datetime, tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo

logger = logging.getLogger("gameday.config")


def _csv(raw: Optional[str]) -> List[str]:
    return [p.strip().lower() for p in (raw or "").split(",") if p.strip()]


# ------------ Environment ------------
LOCAL_TZ_NAME = os.getenv("GAMEDAY_TZ", "America/New_York")
DEFAULT_LEAGUES = _csv(os.getenv("GAMEDAY_LEAGUES", "nfl,ncaaf,ncaam,nba"))

HTTP_TIMEOUT = float(os.getenv("GAMEDAY_HTTP_TIMEOUT", "10"))
HTTP_TRIES = int(os.getenv("GAMEDAY_HTTP_TRIES", "2"))
LEAGUE_TIMEOUT = float(os.getenv("GAMEDAY_LEAGUE_TIMEOUT", "15"))

RANK_CUTOFF = int(os.getenv("GAMEDAY_RANK_CUTOFF", "25"))

ESPN_SITE_BASE = os.getenv(
    "ESPN_SITE_BASE", "https://site.api.espn.com/apis/site/v2/sports"
).rstrip("/")

HEADERS = {"User-Agent": "Mozilla/5.0", "Accept": "application/json"}


def local_tz() -> Optional[tzinfo]:
    """
    Zone that defines the "local" calendar day.

    Returns None when the zone can't be loaded; callers then use naive
    local time (same fallback the date helpers always had).
    """
    try:
        return ZoneInfo(LOCAL_TZ_NAME)
    except Exception:
        logger.warning("could not load zone %r, using system local time", LOCAL_TZ_NAME)
        return None


def local_now() -> datetime:
    tz = local_tz()
    return datetime.now(tz) if tz else datetime.now().astimezone()
