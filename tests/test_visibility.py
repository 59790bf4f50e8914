import pytest

from gameday.services.leagues import get_league
from gameday.services.normalize import normalize_event
from gameday.services.visibility import (
    MSG_ALL_FILTERED,
    MSG_FETCH_FAILED,
    MSG_NO_GAMES,
    MESSAGES,
    build_sections,
    empty_message,
    is_visible,
    order_games,
)

from payloads import competitor, event


def _game(event_id, league_id="ncaaf", home_rank=None, away_rank=None, state="pre", date="2024-10-19T17:00Z"):
    ev = event(
        event_id, date, state=state,
        home=competitor("home", f"H{event_id}", rank=home_rank),
        away=competitor("away", f"A{event_id}", rank=away_rank),
    )
    lg = get_league(league_id)
    return normalize_event(ev, lg.id, lg.displayName)


class TestVisibility:
    @pytest.mark.parametrize("league_id", ["nfl", "nba", "nhl", "mlb", "wnba"])
    def test_major_tier_always_visible(self, league_id):
        g = _game("1", league_id)
        assert is_visible(g, get_league(league_id), show_all=False)

    @pytest.mark.parametrize("home,away,expected", [
        (None, None, False),
        (3, None, True),
        (None, 25, True),
        (26, None, False),
        (30, 40, False),
        (99, 1, True),
    ])
    def test_ranked_leagues_need_a_top25_side(self, home, away, expected):
        g = _game("1", "ncaaf", home_rank=home, away_rank=away)
        assert is_visible(g, get_league("ncaaf"), show_all=False) is expected

    def test_show_all_opens_ranked_leagues(self):
        g = _game("1", "ncaam")
        assert is_visible(g, get_league("ncaam"), show_all=True)


def test_live_first_then_time_stable():
    a = _game("A", state="in", date="2024-10-19T18:00Z")
    b = _game("B", state="pre", date="2024-10-19T17:00Z")
    c = _game("C", state="in", date="2024-10-19T17:00Z")
    assert [g["id"] for g in order_games([a, b, c])] == ["C", "A", "B"]


def test_equal_keys_keep_upstream_order():
    games = [_game(i) for i in ("x", "y", "z")]
    assert [g["id"] for g in order_games(games)] == ["x", "y", "z"]
    assert [g["id"] for g in order_games(list(reversed(games)))] == ["z", "y", "x"]


def test_sections_follow_registry_order_and_drop_empty():
    games = [
        _game("n1", "nba"),
        _game("c1", "ncaaf"),  # unranked, hidden
        _game("f1", "nfl"),
        _game("c2", "ncaaf", home_rank=7),
    ]
    snapshot = list(games)
    sections = build_sections(games, ["nba", "ncaaf", "nfl"], show_all=False)
    assert [s["leagueId"] for s in sections] == ["nfl", "ncaaf", "nba"]
    assert [g["id"] for g in sections[1]["games"]] == ["c2"]
    assert games == snapshot


def test_sections_skip_inactive_leagues():
    sections = build_sections([_game("n1", "nba")], ["nfl"], show_all=True)
    assert sections == []


def test_card_fields():
    live = _game("1", "nfl", state="in")
    card = build_sections([live], None, show_all=False)[0]["games"][0]
    assert card["isLive"] and not card["isFinal"]
    assert card["statusText"] == live["statusDetail"]

    pre = _game("2", "nfl", date="2024-10-19T17:00Z")
    card = build_sections([pre], None, show_all=False)[0]["games"][0]
    assert card["statusText"] == "1:00 PM"


def test_empty_messages():
    assert empty_message(0, [], all_failed=False) == MSG_NO_GAMES
    assert empty_message(4, [], all_failed=False) == MSG_ALL_FILTERED
    assert empty_message(0, [], all_failed=True) == MSG_FETCH_FAILED
    assert empty_message(1, [{"leagueId": "nfl", "leagueName": "NFL", "games": []}], all_failed=False) is None


@pytest.mark.parametrize("code", [MSG_NO_GAMES, MSG_ALL_FILTERED])
def test_empty_texts_do_not_assume_today(code):
    # the board can show any date, not only the current one
    assert "today" not in MESSAGES[code].lower()
