# gameday/services/reconcile.py
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List

from gameday.models.types import Game
from gameday.services.espn_common import local_date_of

logger = logging.getLogger("gameday.reconcile")


def is_same_local_date(game: Game, day: date) -> bool:
    return local_date_of(game["kickoff"]) == day


def reconcile_dates(games: Iterable[Game], day: date) -> List[Game]:
    """
    Drop games whose local kickoff date isn't `day`.

    ESPN's `dates=` window leaks adjacent-day events (late West Coast
    games, UTC-dated doubleheaders); this is the only place they are removed.
    """
    kept: List[Game] = []
    dropped = 0
    for g in games:
        if is_same_local_date(g, day):
            kept.append(g)
        else:
            dropped += 1
    if dropped:
        logger.info("reconcile %s: dropped %d off-day games", day.isoformat(), dropped)
    return kept
