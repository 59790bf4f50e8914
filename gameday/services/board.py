# gameday/services/board.py
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, NamedTuple, Optional, Tuple

import httpx

from gameday.core.config import LEAGUE_TIMEOUT
from gameday.core.errors import NoActiveLeaguesError
from gameday.models.types import Game, GameDetail
from gameday.services.detail import build_detail
from gameday.services.espn_common import build_client
from gameday.services.leagues import require_league, resolve_active
from gameday.services.scoreboard import collect_games, fan_out

logger = logging.getLogger("gameday.board")


class WorkingSet(NamedTuple):
    date: date
    leagueIds: Tuple[str, ...]
    games: Tuple[Game, ...]
    failed: Tuple[str, ...]
    generation: int
    stale: bool = False

    @property
    def all_failed(self) -> bool:
        return bool(self.leagueIds) and len(self.failed) == len(self.leagueIds)


class GameBoard:
    """
    Owns the in-memory games for the selected date.

    `replace` is the only writer: each call is one fetch cycle that
    rebuilds the whole collection. Cycles are numbered; a cycle that
    finishes after a newer one has started is handed back to its caller
    flagged stale and never committed.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        league_timeout: float = LEAGUE_TIMEOUT,
    ):
        self._transport = transport
        self._league_timeout = league_timeout
        self._generation = 0
        self._current: Optional[WorkingSet] = None

    @property
    def current(self) -> Optional[WorkingSet]:
        return self._current

    @property
    def generation(self) -> int:
        return self._generation

    async def replace(self, day: date, league_ids: Iterable[str]) -> WorkingSet:
        leagues = resolve_active(league_ids)
        if not leagues:
            raise NoActiveLeaguesError()

        self._generation += 1
        gen = self._generation

        async with build_client(self._transport) as client:
            batches, failed = await fan_out(client, leagues, day, timeout=self._league_timeout)
        games = collect_games(batches, day)

        ws = WorkingSet(
            date=day,
            leagueIds=tuple(lg.id for lg in leagues),
            games=tuple(games),
            failed=tuple(failed),
            generation=gen,
        )
        if gen != self._generation:
            logger.info("board: cycle %d finished after cycle %d started; not committed", gen, self._generation)
            return ws._replace(stale=True)

        self._current = ws
        logger.info(
            "board: cycle %d date=%s leagues=%s games=%d failed=%s",
            gen, day.isoformat(), ",".join(ws.leagueIds), len(games), ",".join(failed) or "-",
        )
        return ws

    def find_game(self, league_id: str, event_id: str) -> Optional[Game]:
        if self._current is None:
            return None
        return next(
            (g for g in self._current.games if g["leagueId"] == league_id and g["id"] == event_id),
            None,
        )

    async def detail(self, league_id: str, event_id: str, day: date) -> GameDetail:
        league = require_league(league_id)
        async with build_client(self._transport) as client:
            return await build_detail(client, league, event_id, day)
