# gameday/models/types.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from typing_extensions import Literal, TypedDict

StatusState = Literal["SCHEDULED", "LIVE", "FINAL"]

SCHEDULED: StatusState = "SCHEDULED"
LIVE: StatusState = "LIVE"
FINAL: StatusState = "FINAL"


class Team(TypedDict):
    abbreviation: str
    displayName: str
    logoUrl: str
    score: Optional[float]
    rank: Optional[int]
    record: Optional[str]


class Game(TypedDict):
    id: str
    leagueId: str
    leagueName: str
    kickoff: datetime
    statusState: StatusState
    statusDetail: str
    network: str
    home: Team
    away: Team


class GameCard(Game):
    """A Game plus the display fields the list view shows."""

    isLive: bool
    isFinal: bool
    kickoffLocal: str
    statusText: str


class LeagueSection(TypedDict):
    leagueId: str
    leagueName: str
    games: List[GameCard]


class WinProbabilityEstimate(TypedDict):
    awayPct: float
    homePct: float


class Prediction(WinProbabilityEstimate):
    method: str
    sources: List[Literal["odds", "records"]]


class Venue(TypedDict):
    name: Optional[str]
    city: Optional[str]
    state: Optional[str]


class Linescores(TypedDict):
    away: List[float]
    home: List[float]


class StatRow(TypedDict):
    label: str
    away: str
    home: str


class PlayerRow(TypedDict):
    athlete: str
    values: List[str]


class PlayerGroup(TypedDict):
    name: str
    headers: List[str]
    rows: List[PlayerRow]


class TeamPlayers(TypedDict):
    team: str
    groups: List[PlayerGroup]


class Situation(TypedDict):
    possession: Optional[str]
    downDistance: Optional[str]
    lastPlay: Optional[str]
    isRedZone: bool


class Leader(TypedDict):
    category: str
    athlete: str
    team: Optional[str]
    value: str


class PickcenterOdds(TypedDict):
    provider: Optional[str]
    details: Optional[str]
    overUnder: Optional[float]
    awayMoneyLine: Optional[float]
    homeMoneyLine: Optional[float]


class GameDetail(Game):
    venue: Optional[Venue]
    broadcasts: List[str]
    linescores: Optional[Linescores]
    teamStats: Optional[List[StatRow]]
    playerStats: List[TeamPlayers]
    situation: Optional[Situation]
    leaders: Optional[List[Leader]]
    winProbabilitySeries: List[float]
    winProbability: Optional[WinProbabilityEstimate]
    odds: Optional[PickcenterOdds]
    prediction: Optional[Prediction]
