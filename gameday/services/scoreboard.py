# gameday/services/scoreboard.py
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

import httpx

from gameday.core.config import LEAGUE_TIMEOUT
from gameday.core.errors import LeagueFetchError, NoActiveLeaguesError
from gameday.models.types import Game
from gameday.services.espn_common import get_json, yyyymmdd
from gameday.services.leagues import League
from gameday.services.normalize import normalize_batch
from gameday.services.reconcile import reconcile_dates

logger = logging.getLogger("gameday.scoreboard")


class LeagueBatch(NamedTuple):
    leagueId: str
    leagueName: str
    events: List[Dict[str, Any]]


async def fetch_league_events(client: httpx.AsyncClient, league: League, day: date) -> List[Dict[str, Any]]:
    """
    Raw ESPN events for one league on one local calendar day.
    Any transport, status or payload problem becomes LeagueFetchError.
    """
    params = {"dates": yyyymmdd(day)}
    try:
        data = await get_json(client, league.endpointTemplate, params)
    except (httpx.HTTPError, ValueError) as e:
        raise LeagueFetchError(league.id, repr(e)) from e

    events = data.get("events")
    if not isinstance(events, list):
        raise LeagueFetchError(league.id, "payload has no events list")
    logger.info("scoreboard %s %s -> %d events", league.id, params["dates"], len(events))
    return events


async def _guarded(
    client: httpx.AsyncClient,
    league: League,
    day: date,
    timeout: float,
) -> Optional[LeagueBatch]:
    try:
        events = await asyncio.wait_for(fetch_league_events(client, league, day), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("scoreboard %s timed out after %.1fs", league.id, timeout)
        return None
    except LeagueFetchError as e:
        logger.warning("scoreboard %s failed: %s", league.id, e.reason)
        return None
    return LeagueBatch(league.id, league.displayName, events)


async def fan_out(
    client: httpx.AsyncClient,
    leagues: Sequence[League],
    day: date,
    timeout: float = LEAGUE_TIMEOUT,
) -> Tuple[List[LeagueBatch], List[str]]:
    """
    One concurrent request per league; join once all have settled.

    Returns (successful batches in the order `leagues` was given, ids of
    leagues that failed). Raises NoActiveLeaguesError for an empty set.
    """
    if not leagues:
        raise NoActiveLeaguesError()

    results = await asyncio.gather(*(_guarded(client, lg, day, timeout) for lg in leagues))

    batches: List[LeagueBatch] = []
    failed: List[str] = []
    for league, res in zip(leagues, results):
        if res is None:
            failed.append(league.id)
        else:
            batches.append(res)
    return batches, failed


def collect_games(batches: Sequence[LeagueBatch], day: date) -> List[Game]:
    games: List[Game] = []
    for batch in batches:
        normalized = normalize_batch(batch.events, batch.leagueId, batch.leagueName)
        games.extend(reconcile_dates(normalized, day))
    return games
