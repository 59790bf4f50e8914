# gameday/services/leagues.py
from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple, Optional

from gameday.core.config import ESPN_SITE_BASE
from gameday.core.errors import UnknownLeagueError


class League(NamedTuple):
    id: str
    displayName: str
    endpointTemplate: str
    detailPathSegment: str
    isMajorTier: bool = False
    hasPossessionSituations: bool = False


def _scoreboard(path: str) -> str:
    return f"{ESPN_SITE_BASE}/{path}/scoreboard"


# Declaration order is the section order of every grouped response.
LEAGUES: List[League] = [
    League("nfl", "NFL", _scoreboard("football/nfl"), "football/nfl",
           isMajorTier=True, hasPossessionSituations=True),
    League("ncaaf", "NCAA Football", _scoreboard("football/college-football"), "football/college-football",
           hasPossessionSituations=True),
    League("ncaam", "NCAA Men's BB", _scoreboard("basketball/mens-college-basketball"),
           "basketball/mens-college-basketball"),
    League("nba", "NBA", _scoreboard("basketball/nba"), "basketball/nba", isMajorTier=True),
    League("wnba", "WNBA", _scoreboard("basketball/wnba"), "basketball/wnba", isMajorTier=True),
    League("nhl", "NHL", _scoreboard("hockey/nhl"), "hockey/nhl", isMajorTier=True),
    League("mlb", "MLB", _scoreboard("baseball/mlb"), "baseball/mlb", isMajorTier=True),
]

_BY_ID: Dict[str, League] = {lg.id: lg for lg in LEAGUES}


def get_league(league_id: str) -> Optional[League]:
    return _BY_ID.get((league_id or "").strip().lower())


def require_league(league_id: str) -> League:
    league = get_league(league_id)
    if league is None:
        raise UnknownLeagueError(f"Unsupported league: {league_id}")
    return league


def detail_path_for(league_id: str) -> str:
    """Summary path token for a league; '' when the league isn't mapped."""
    league = get_league(league_id)
    return league.detailPathSegment if league else ""


def resolve_active(league_ids: Iterable[str]) -> List[League]:
    """
    Registry entries for the requested ids, in registry order.
    Unknown ids raise UnknownLeagueError; duplicates collapse.
    """
    wanted = set()
    for raw in league_ids:
        wanted.add(require_league(raw).id)
    return [lg for lg in LEAGUES if lg.id in wanted]
