# gameday/routers/scoreboard_routes.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from gameday.core.config import DEFAULT_LEAGUES
from gameday.services.board import GameBoard, WorkingSet
from gameday.services.espn_common import coerce_date, local_date_of, relative_day_label
from gameday.services.leagues import LEAGUES
from gameday.services.visibility import MESSAGES, build_sections, empty_message

logger = logging.getLogger("gameday.scoreboard_routes")
router = APIRouter(tags=["scoreboard"])

_board = GameBoard()


def get_board() -> GameBoard:
    return _board


def _parse_leagues(leagues: Optional[str]):
    # absent -> configured defaults; present but blank -> nothing selected
    if leagues is None:
        return list(DEFAULT_LEAGUES)
    return [p.strip() for p in leagues.split(",") if p.strip()]


def _render(ws: WorkingSet, show_all: bool) -> Dict[str, Any]:
    sections = build_sections(ws.games, ws.leagueIds, show_all)
    message = empty_message(len(ws.games), sections, ws.all_failed)
    return {
        "date": ws.date.isoformat(),
        "dateLabel": relative_day_label(ws.date),
        "generation": ws.generation,
        "stale": ws.stale,
        "showAll": show_all,
        "leagues": list(ws.leagueIds),
        "failedLeagues": list(ws.failed),
        "totalGames": len(ws.games),
        "sections": sections,
        "message": message,
        "messageText": MESSAGES.get(message) if message else None,
    }


# -------------------------
# Leagues
# -------------------------
@router.get("/leagues")
async def list_leagues():
    return [
        {
            "id": lg.id,
            "name": lg.displayName,
            "isMajorTier": lg.isMajorTier,
            "hasPossessionSituations": lg.hasPossessionSituations,
            "default": lg.id in DEFAULT_LEAGUES,
        }
        for lg in LEAGUES
    ]


# -------------------------
# Scoreboard (fetch cycle)
# -------------------------
@router.get("/scoreboard")
async def scoreboard(
    date: Optional[str] = None,
    leagues: Optional[str] = Query(None, description="CSV of league ids; blank means none selected"),
    show_all: bool = Query(False, description="Also show games without a Top-25 team"),
    board: GameBoard = Depends(get_board),
):
    """
    Fetch every selected league for a date, then group, filter and order.
    """
    try:
        day = coerce_date(date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    ws = await board.replace(day, _parse_leagues(leagues))
    res = _render(ws, show_all)
    logger.info("scoreboard date=%s show_all=%s -> %d sections", res["date"], show_all, len(res["sections"]))
    return res


@router.get("/scoreboard/current")
async def scoreboard_current(
    show_all: bool = False,
    board: GameBoard = Depends(get_board),
):
    """Re-apply visibility to the games already held; no upstream calls."""
    ws = board.current
    if ws is None:
        raise HTTPException(404, "No scoreboard loaded yet")
    return _render(ws, show_all)


# -------------------------
# Single game detail
# -------------------------
@router.get("/games/{league_id}/{event_id}")
async def game_detail(
    league_id: str,
    event_id: str,
    date: Optional[str] = None,
    board: GameBoard = Depends(get_board),
):
    """
    Scoreboard event + box score summary for one game.
    Without `date`, uses the game's own date from the held scoreboard, else today.
    """
    if date:
        try:
            day = coerce_date(date)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    else:
        held = board.find_game(league_id.lower(), event_id)
        day = local_date_of(held["kickoff"]) if held else coerce_date(None)

    return await board.detail(league_id, event_id, day)
