# gameday/services/normalize.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from gameday.core.errors import MalformedEventError
from gameday.models.types import FINAL, LIVE, SCHEDULED, Game, StatusState, Team
from gameday.services.espn_common import parse_kickoff

logger = logging.getLogger("gameday.normalize")

# ESPN encodes "unranked" as 99 rather than leaving the field out.
RANK_SENTINEL = 99

_STATE_MAP: Dict[str, StatusState] = {
    "pre": SCHEDULED,
    "in": LIVE,
    "post": FINAL,
}


def obj(x: Any) -> Dict[str, Any]:
    """`x` if it's a JSON object, else {}."""
    return x if isinstance(x, dict) else {}


def dicts(x: Any) -> List[Dict[str, Any]]:
    """Object entries of a JSON array; anything else in the array is ignored."""
    if not isinstance(x, list):
        return []
    return [e for e in x if isinstance(e, dict)]


def text(x: Any) -> str:
    return x if isinstance(x, str) else ""


def first(seq: Any) -> Dict[str, Any]:
    """First element of a list-ish upstream field, or {}."""
    if isinstance(seq, list) and seq and isinstance(seq[0], dict):
        return seq[0]
    return {}


def competition_of(ev: Dict[str, Any]) -> Dict[str, Any]:
    return first(obj(ev).get("competitions"))


def find_side(comp: Dict[str, Any], side: str) -> Optional[Dict[str, Any]]:
    for c in dicts(obj(comp).get("competitors")):
        if c.get("homeAway") == side:
            return c
    return None


def normalize_rank(raw: Any) -> Optional[int]:
    try:
        r = int(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    return r if r < RANK_SENTINEL else None


def _competitor_rank(c: Dict[str, Any]) -> Optional[int]:
    curated = c.get("curatedRank")
    if curated is None:
        curated = obj(c.get("team")).get("curatedRank")
    return normalize_rank(obj(curated).get("current"))


def parse_score(raw: Any) -> Optional[float]:
    if isinstance(raw, dict):
        raw = raw.get("value", raw.get("displayValue"))
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def record_summary(c: Dict[str, Any]) -> Optional[str]:
    summary = first(c.get("records")).get("summary")
    return summary if isinstance(summary, str) and summary else None


def broadcast_network(comp: Dict[str, Any]) -> str:
    names = first(comp.get("broadcasts")).get("names")
    if isinstance(names, list) and names and isinstance(names[0], str):
        return names[0]
    return ""


def _team(c: Dict[str, Any]) -> Team:
    team = obj(c.get("team"))
    return {
        "abbreviation": text(team.get("abbreviation")),
        "displayName": text(team.get("displayName")) or text(team.get("name")),
        "logoUrl": text(team.get("logo")),
        "score": parse_score(c.get("score")),
        "rank": _competitor_rank(c),
        "record": record_summary(c),
    }


def status_of(ev: Dict[str, Any]) -> Dict[str, Any]:
    status = obj(ev.get("status")) or obj(competition_of(ev).get("status"))
    return obj(status.get("type"))


def normalize_event(ev: Dict[str, Any], league_id: str, league_name: str) -> Game:
    """
    Map one ESPN scoreboard event onto the canonical Game.

    Raises MalformedEventError when the event has no id, no parseable
    kickoff, or is missing its home or away competitor.
    """
    if not isinstance(ev, dict):
        raise MalformedEventError(None, "event is not an object")
    event_id = ev.get("id")
    if isinstance(event_id, bool) or not isinstance(event_id, (str, int)) or event_id == "":
        raise MalformedEventError(None, "missing id")
    event_id = str(event_id)

    kickoff = parse_kickoff(ev.get("date"))
    if kickoff is None:
        raise MalformedEventError(event_id, f"bad date {ev.get('date')!r}")

    comp = competition_of(ev)
    home = find_side(comp, "home")
    away = find_side(comp, "away")
    if home is None or away is None:
        raise MalformedEventError(event_id, "missing home/away competitor")

    stype = status_of(ev)
    return {
        "id": event_id,
        "leagueId": league_id,
        "leagueName": league_name,
        "kickoff": kickoff,
        "statusState": _STATE_MAP.get(text(stype.get("state")), SCHEDULED),
        "statusDetail": text(stype.get("detail")) or text(stype.get("shortDetail")) or text(stype.get("description")),
        "network": broadcast_network(comp),
        "home": _team(home),
        "away": _team(away),
    }


def normalize_batch(events: Iterable[Any], league_id: str, league_name: str) -> List[Game]:
    games: List[Game] = []
    skipped = 0
    for ev in events:
        try:
            games.append(normalize_event(ev, league_id, league_name))
        except MalformedEventError as e:
            skipped += 1
            logger.warning("normalize %s: skipping %s", league_id, e)
    if skipped:
        logger.info("normalize %s: kept=%d skipped=%d", league_id, len(games), skipped)
    return games
