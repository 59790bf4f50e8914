from datetime import date

from gameday.services.espn_common import coerce_date, local_date_of, relative_day_label, yyyymmdd
from gameday.services.normalize import normalize_event
from gameday.services.reconcile import reconcile_dates

from payloads import event


def _games(*dates):
    return [normalize_event(event(str(i), d), "nfl", "NFL") for i, d in enumerate(dates)]


def test_keeps_only_local_calendar_day(game_day):
    games = _games(
        "2024-10-19T17:00Z",  # 1pm EDT
        "2024-10-20T02:00Z",  # 10pm EDT on the 19th, already the 20th in UTC
        "2024-10-19T03:00Z",  # 11pm EDT on the 18th
        "2024-10-20T17:00Z",  # next day
    )
    kept = reconcile_dates(games, game_day)
    assert [g["id"] for g in kept] == ["0", "1"]


def test_every_kept_game_matches_requested_day(game_day):
    games = _games(*[f"2024-10-{d:02d}T{h:02d}:00Z" for d in (18, 19, 20) for h in (0, 6, 12, 18)])
    kept = reconcile_dates(games, game_day)
    assert kept
    assert all(local_date_of(g["kickoff"]) == game_day for g in kept)


def test_date_param_is_local_yyyymmdd():
    assert yyyymmdd(date(2024, 1, 5)) == "20240105"
    assert coerce_date("2024-01-05") == date(2024, 1, 5)
    assert coerce_date("20240105") == date(2024, 1, 5)


def test_relative_labels():
    today = date(2024, 10, 19)
    assert relative_day_label(today, today) == "Today"
    assert relative_day_label(date(2024, 10, 20), today) == "Tomorrow"
    assert relative_day_label(date(2024, 10, 18), today) == "Yesterday"
    assert relative_day_label(date(2024, 10, 26), today) == "Sat, Oct 26"
