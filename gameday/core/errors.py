# gameday/core/errors.py
from __future__ import annotations

from typing import Optional


class GamedayError(RuntimeError):
    pass


class LeagueFetchError(GamedayError):
    """One league's scoreboard request failed. Absorbed by the fan-out."""

    def __init__(self, league_id: str, reason: str):
        super().__init__(f"{league_id}: {reason}")
        self.league_id = league_id
        self.reason = reason


class NoActiveLeaguesError(GamedayError):
    def __init__(self):
        super().__init__("No leagues selected.")


class UnknownLeagueError(GamedayError):
    pass


class MalformedEventError(GamedayError):
    """One upstream event could not be normalized. The rest of its batch survives."""

    def __init__(self, event_id: Optional[str], reason: str):
        super().__init__(f"event {event_id or '?'}: {reason}")
        self.event_id = event_id
        self.reason = reason


class DetailFetchError(GamedayError):
    pass


class EventNotFoundError(DetailFetchError):
    def __init__(self, league_id: str, event_id: str):
        super().__init__(f"event {event_id} no longer available in {league_id}")
        self.league_id = league_id
        self.event_id = event_id
