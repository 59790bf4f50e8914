# gameday/services/visibility.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from gameday.core.config import RANK_CUTOFF
from gameday.models.types import FINAL, LIVE, Game, GameCard, LeagueSection
from gameday.services.espn_common import local_time_label
from gameday.services.leagues import LEAGUES, League

# User-facing empty-state codes
MSG_NO_GAMES = "no_games"
MSG_ALL_FILTERED = "all_filtered"
MSG_FETCH_FAILED = "fetch_failed"

MESSAGES = {
    MSG_NO_GAMES: 'No games scheduled. Try "Show Unranked" or check "Leagues".',
    MSG_ALL_FILTERED: 'No ranked matchups. Turn on "Show Unranked" to see every game.',
    MSG_FETCH_FAILED: "Error loading data. Please try again.",
}


def _ranked(rank: Optional[int], cutoff: int) -> bool:
    return rank is not None and rank <= cutoff


def is_visible(game: Game, league: League, show_all: bool, cutoff: int = RANK_CUTOFF) -> bool:
    if league.isMajorTier or show_all:
        return True
    return _ranked(game["home"]["rank"], cutoff) or _ranked(game["away"]["rank"], cutoff)


def order_games(games: Iterable[Game]) -> List[Game]:
    """Live first, then kickoff ascending. sorted() is stable, so ties keep upstream order."""
    return sorted(games, key=lambda g: (g["statusState"] != LIVE, g["kickoff"]))


def status_text(game: Game) -> str:
    if game["statusState"] == LIVE:
        return game["statusDetail"]
    if game["statusState"] == FINAL:
        return game["statusDetail"] or "Final"
    return local_time_label(game["kickoff"])


def to_card(game: Game) -> GameCard:
    card: GameCard = {
        **game,
        "isLive": game["statusState"] == LIVE,
        "isFinal": game["statusState"] == FINAL,
        "kickoffLocal": local_time_label(game["kickoff"]),
        "statusText": status_text(game),
    }
    return card


def build_sections(
    games: Sequence[Game],
    active_ids: Optional[Iterable[str]],
    show_all: bool,
    cutoff: int = RANK_CUTOFF,
) -> List[LeagueSection]:
    """
    Group by league in registry order, filter for visibility, order each group.
    Leagues with nothing visible produce no section. `games` is not mutated.
    """
    active = None if active_ids is None else set(active_ids)
    sections: List[LeagueSection] = []
    for league in LEAGUES:
        if active is not None and league.id not in active:
            continue
        visible = [
            g for g in games
            if g["leagueId"] == league.id and is_visible(g, league, show_all, cutoff)
        ]
        if not visible:
            continue
        sections.append({
            "leagueId": league.id,
            "leagueName": league.displayName,
            "games": [to_card(g) for g in order_games(visible)],
        })
    return sections


def empty_message(total_games: int, sections: Sequence[LeagueSection], all_failed: bool) -> Optional[str]:
    if sections:
        return None
    if all_failed:
        return MSG_FETCH_FAILED
    return MSG_ALL_FILTERED if total_games else MSG_NO_GAMES
