# gameday/services/detail.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from gameday.core.config import ESPN_SITE_BASE
from gameday.core.errors import DetailFetchError, EventNotFoundError, LeagueFetchError, MalformedEventError
from gameday.models.matchup_model import parse_moneyline, predict_matchup
from gameday.models.types import (
    LIVE,
    SCHEDULED,
    Game,
    GameDetail,
    Leader,
    Linescores,
    PickcenterOdds,
    PlayerGroup,
    Situation,
    StatRow,
    TeamPlayers,
    Venue,
    WinProbabilityEstimate,
)
from gameday.services.espn_common import get_json
from gameday.services.leagues import League, detail_path_for
from gameday.services.normalize import competition_of, dicts, find_side, first, normalize_event, obj, parse_score, text
from gameday.services.scoreboard import fetch_league_events

logger = logging.getLogger("gameday.detail")


# ---------------- Upstream ----------------
async def fetch_summary(client: httpx.AsyncClient, league_id: str, event_id: str) -> Dict[str, Any]:
    """Box score / summary payload, or {} when the league has no summary path."""
    path = detail_path_for(league_id)
    if not path:
        logger.info("detail %s: no summary path, skipping box score for %s", league_id, event_id)
        return {}
    url = f"{ESPN_SITE_BASE}/{path}/summary"
    try:
        return await get_json(client, url, {"event": event_id})
    except (httpx.HTTPError, ValueError) as e:
        raise DetailFetchError(f"summary unavailable for {league_id}/{event_id}: {e!r}") from e


# ---------------- Scoreboard-side sections ----------------
def _venue(comp: Dict[str, Any]) -> Optional[Venue]:
    v = comp.get("venue")
    if not isinstance(v, dict):
        return None
    addr = obj(v.get("address"))
    return {"name": v.get("fullName"), "city": addr.get("city"), "state": addr.get("state")}


def _broadcasts(comp: Dict[str, Any]) -> List[str]:
    out: List[str] = []
    for b in dicts(comp.get("broadcasts")):
        names = b.get("names")
        for name in names if isinstance(names, list) else []:
            if isinstance(name, str) and name and name not in out:
                out.append(name)
    return out


def _period_scores(c: Optional[Dict[str, Any]]) -> List[float]:
    scores = [parse_score(ls) for ls in dicts(obj(c).get("linescores"))]
    return [s for s in scores if s is not None]


def _linescores(comp: Dict[str, Any]) -> Optional[Linescores]:
    away = _period_scores(find_side(comp, "away"))
    home = _period_scores(find_side(comp, "home"))
    if not away and not home:
        return None
    return {"away": away, "home": home}


def _abbr_by_team_id(comp: Dict[str, Any]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for c in dicts(comp.get("competitors")):
        team = obj(c.get("team"))
        if team.get("id") is not None:
            out[str(team["id"])] = text(team.get("abbreviation"))
    return out


def _situation(comp: Dict[str, Any]) -> Optional[Situation]:
    sit = comp.get("situation")
    if not isinstance(sit, dict):
        return None
    possession = sit.get("possession")
    return {
        "possession": _abbr_by_team_id(comp).get(str(possession)) if possession is not None else None,
        "downDistance": text(sit.get("downDistanceText")) or text(sit.get("shortDownDistanceText")) or None,
        "lastPlay": text(obj(sit.get("lastPlay")).get("text")) or None,
        "isRedZone": bool(sit.get("isRedZone")),
    }


def _top_leader(cat: Dict[str, Any], team_abbr: Optional[str], abbrs: Dict[str, str]) -> Optional[Leader]:
    top = first(cat.get("leaders"))
    if not top:
        return None
    athlete = obj(top.get("athlete"))
    team_id = obj(top.get("team")).get("id")
    return {
        "category": text(cat.get("displayName")) or text(cat.get("name")),
        "athlete": text(athlete.get("displayName")) or text(athlete.get("shortName")) or text(athlete.get("fullName")),
        "team": team_abbr or (abbrs.get(str(team_id)) if team_id is not None else None),
        "value": text(top.get("displayValue")),
    }


def _leaders(comp: Dict[str, Any]) -> Optional[List[Leader]]:
    """
    One top performer per category. Football feeds put leaders on the
    competition, basketball/hockey feeds put them on each competitor.
    """
    abbrs = _abbr_by_team_id(comp)
    out: List[Leader] = []
    for cat in dicts(comp.get("leaders")):
        leader = _top_leader(cat, None, abbrs)
        if leader:
            out.append(leader)
    if not out:
        for side in ("away", "home"):
            c = obj(find_side(comp, side))
            abbr = text(obj(c.get("team")).get("abbreviation")) or None
            for cat in dicts(c.get("leaders")):
                leader = _top_leader(cat, abbr, abbrs)
                if leader:
                    out.append(leader)
    return out or None


# ---------------- Summary-side sections ----------------
def _by_abbreviation(entries: Any, abbr: str) -> Optional[Dict[str, Any]]:
    for e in dicts(entries):
        if text(obj(e.get("team")).get("abbreviation")) == abbr:
            return e
    return None


def team_stat_rows(summary: Dict[str, Any], away_abbr: str, home_abbr: str) -> Optional[List[StatRow]]:
    teams = obj(summary.get("boxscore")).get("teams")
    away_stats = obj(_by_abbreviation(teams, away_abbr)).get("statistics")
    home_stats = obj(_by_abbreviation(teams, home_abbr)).get("statistics")
    if not isinstance(away_stats, list) or not isinstance(home_stats, list):
        return None
    rows: List[StatRow] = []
    for a, h in zip(away_stats, home_stats):
        a, h = obj(a), obj(h)
        rows.append({
            "label": text(a.get("label")) or text(h.get("label")) or text(a.get("name")),
            "away": str(a.get("displayValue", "")),
            "home": str(h.get("displayValue", "")),
        })
    return rows or None


def _player_group(group: Dict[str, Any]) -> PlayerGroup:
    athletes = dicts(group.get("athletes"))
    headers = first(athletes).get("labels") or group.get("labels")
    rows = []
    for a in athletes:
        person = obj(a.get("athlete"))
        stats = a.get("stats")
        rows.append({
            "athlete": text(person.get("displayName")) or text(person.get("shortName")),
            "values": [str(v) for v in stats] if isinstance(stats, list) else [],
        })
    return {
        "name": text(group.get("name")) or text(group.get("text")),
        "headers": [str(h) for h in headers] if isinstance(headers, list) else [],
        "rows": rows,
    }


def player_stat_groups(summary: Dict[str, Any], away_abbr: str, home_abbr: str) -> List[TeamPlayers]:
    players = obj(summary.get("boxscore")).get("players")
    out: List[TeamPlayers] = []
    for abbr in (away_abbr, home_abbr):
        entry = _by_abbreviation(players, abbr)
        if not entry:
            continue
        groups = [_player_group(g) for g in dicts(entry.get("statistics"))]
        if groups:
            out.append({"team": abbr, "groups": groups})
    return out


def win_probability_series(summary: Dict[str, Any]) -> List[float]:
    series: List[float] = []
    for point in dicts(summary.get("winprobability")):
        v = parse_score(point.get("homeWinPercentage"))
        if v is not None:
            series.append(min(max(v, 0.0), 1.0) * 100)
    return series


def current_win_probability(series: List[float]) -> Optional[WinProbabilityEstimate]:
    """Most recent point of the series; never an average over it."""
    if not series:
        return None
    home = series[-1]
    return {"awayPct": 100 - home, "homePct": home}


def pickcenter_odds(summary: Dict[str, Any]) -> Optional[PickcenterOdds]:
    pc = first(summary.get("pickcenter"))
    if not pc:
        return None
    over_under = pc.get("overUnder")
    return {
        "provider": text(obj(pc.get("provider")).get("name")) or None,
        "details": text(pc.get("details")) or None,
        "overUnder": float(over_under) if isinstance(over_under, (int, float)) and not isinstance(over_under, bool) else None,
        "awayMoneyLine": parse_moneyline(obj(pc.get("awayTeamOdds")).get("moneyLine")),
        "homeMoneyLine": parse_moneyline(obj(pc.get("homeTeamOdds")).get("moneyLine")),
    }


# ---------------- Merge ----------------
def merge_detail(game: Game, league: League, event: Dict[str, Any], summary: Dict[str, Any]) -> GameDetail:
    comp = competition_of(event)
    live = game["statusState"] == LIVE
    away_abbr = game["away"]["abbreviation"]
    home_abbr = game["home"]["abbreviation"]

    odds = pickcenter_odds(summary)
    series = win_probability_series(summary)

    prediction = None
    if game["statusState"] == SCHEDULED:
        prediction = predict_matchup(
            (odds or {}).get("awayMoneyLine"),
            (odds or {}).get("homeMoneyLine"),
            game["away"]["record"],
            game["home"]["record"],
        )

    detail: GameDetail = {
        **game,
        "venue": _venue(comp),
        "broadcasts": _broadcasts(comp),
        "linescores": _linescores(comp),
        "teamStats": team_stat_rows(summary, away_abbr, home_abbr),
        "playerStats": player_stat_groups(summary, away_abbr, home_abbr),
        "situation": _situation(comp) if live and league.hasPossessionSituations else None,
        "leaders": _leaders(comp) if live else None,
        "winProbabilitySeries": series,
        "winProbability": current_win_probability(series),
        "odds": odds,
        "prediction": prediction,
    }
    return detail


async def build_detail(client: httpx.AsyncClient, league: League, event_id: str, day: date) -> GameDetail:
    """
    Re-fetch the league scoreboard for `day`, confirm the event is still
    listed, then pull its summary and merge the two.
    """
    try:
        events = await fetch_league_events(client, league, day)
    except LeagueFetchError as e:
        raise DetailFetchError(f"scoreboard unavailable for {league.id}: {e.reason}") from e

    event = next((ev for ev in events if isinstance(ev, dict) and str(ev.get("id")) == event_id), None)
    if event is None:
        raise EventNotFoundError(league.id, event_id)

    try:
        game = normalize_event(event, league.id, league.displayName)
    except MalformedEventError as e:
        raise DetailFetchError(str(e)) from e

    summary = await fetch_summary(client, league.id, event_id)
    logger.info("detail %s/%s state=%s summary_keys=%s", league.id, event_id, game["statusState"], sorted(summary))
    return merge_detail(game, league, event, summary)
