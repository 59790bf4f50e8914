import pytest

from gameday.models.matchup_model import (
    METHOD_BOTH,
    METHOD_ODDS,
    METHOD_RECORDS,
    moneyline_to_prob,
    odds_signal,
    parse_moneyline,
    parse_record,
    predict_matchup,
    record_to_prob,
    records_signal,
)


class TestMoneyline:
    def test_favorite(self):
        assert moneyline_to_prob(-150) == pytest.approx(60.0)

    def test_underdog(self):
        assert moneyline_to_prob(130) == pytest.approx(43.478, abs=1e-3)

    def test_even(self):
        assert moneyline_to_prob(100) == pytest.approx(50.0)

    @pytest.mark.parametrize("raw,expected", [("+130", 130.0), ("-150", -150.0), (-110, -110.0), ("EVEN", 100.0)])
    def test_parse(self, raw, expected):
        assert parse_moneyline(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "n/a", True])
    def test_parse_unusable(self, raw):
        assert parse_moneyline(raw) is None

    def test_signal_strips_vig(self):
        est = odds_signal(130, -150)
        assert est["awayPct"] == pytest.approx(42.02, abs=0.01)
        assert est["homePct"] == pytest.approx(57.98, abs=0.01)
        assert est["awayPct"] + est["homePct"] == pytest.approx(100.0)

    def test_signal_needs_both_sides(self):
        assert odds_signal(None, -150) is None
        assert odds_signal(130, None) is None


class TestRecords:
    def test_win_pct(self):
        assert record_to_prob("10-2") == pytest.approx(83.333, abs=1e-3)

    def test_ties_ignored(self):
        assert parse_record("8-3-1") == (8, 3)

    @pytest.mark.parametrize("raw", [None, "", "10", "a-b", "0-0"])
    def test_unusable(self, raw):
        assert record_to_prob(raw) is None

    def test_signal_normalized(self):
        est = records_signal("5-5", "10-2")
        assert est["awayPct"] + est["homePct"] == pytest.approx(100.0)
        assert est["homePct"] > est["awayPct"]

    def test_signal_needs_both_sides(self):
        assert records_signal("5-5", None) is None


class TestBlend:
    def test_both_signals_average(self):
        odds = odds_signal(130, -150)
        recs = records_signal("5-5", "10-2")
        p = predict_matchup(130, -150, "5-5", "10-2")
        assert p["method"] == METHOD_BOTH
        assert p["sources"] == ["odds", "records"]
        assert p["awayPct"] == pytest.approx((odds["awayPct"] + recs["awayPct"]) / 2)
        assert p["homePct"] == pytest.approx((odds["homePct"] + recs["homePct"]) / 2)
        assert p["awayPct"] + p["homePct"] == pytest.approx(100.0)

    def test_odds_only(self):
        p = predict_matchup(130, -150, None, "10-2")
        assert p["method"] == METHOD_ODDS
        assert p["homePct"] == pytest.approx(57.98, abs=0.01)

    def test_records_only(self):
        p = predict_matchup(None, None, "6-6", "6-6")
        assert p["method"] == METHOD_RECORDS
        assert p["awayPct"] == pytest.approx(50.0)

    def test_nothing_available_is_omitted(self):
        assert predict_matchup(None, "-150", "bad", None) is None
