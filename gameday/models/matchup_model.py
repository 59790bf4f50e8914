# gameday/models/matchup_model.py
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from gameday.models.types import Prediction, WinProbabilityEstimate

METHOD_BOTH = "betting odds & team records"
METHOD_ODDS = "betting odds"
METHOD_RECORDS = "team records"


# ---------------- Signal A: moneyline ----------------
def parse_moneyline(raw: Any) -> Optional[float]:
    """American odds from ESPN: int, float, or strings like '+130' / '-150' / 'EVEN'."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    s = str(raw).strip().upper()
    if s in ("EVEN", "EV"):
        return 100.0
    try:
        return float(s)
    except ValueError:
        return None


def moneyline_to_prob(m: float) -> float:
    """Implied win probability (0-100) for one side, vig included."""
    if m < 0:
        return abs(m) / (abs(m) + 100) * 100
    return 100 / (m + 100) * 100


def _normalized(away: float, home: float) -> Optional[WinProbabilityEstimate]:
    total = away + home
    if total <= 0:
        return None
    return {"awayPct": away / total * 100, "homePct": home / total * 100}


def odds_signal(away_ml: Any, home_ml: Any) -> Optional[WinProbabilityEstimate]:
    a = parse_moneyline(away_ml)
    h = parse_moneyline(home_ml)
    if a is None or h is None:
        return None
    # renormalize to strip the bookmaker margin
    return _normalized(moneyline_to_prob(a), moneyline_to_prob(h))


# ---------------- Signal B: W-L record ----------------
def parse_record(summary: Optional[str]) -> Optional[Tuple[int, int]]:
    if not summary:
        return None
    parts = summary.strip().split("-")
    if len(parts) < 2:
        return None
    try:
        wins, losses = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if wins < 0 or losses < 0 or wins + losses == 0:
        return None
    return wins, losses


def record_to_prob(summary: Optional[str]) -> Optional[float]:
    rec = parse_record(summary)
    if rec is None:
        return None
    wins, losses = rec
    return wins / (wins + losses) * 100


def records_signal(away_record: Optional[str], home_record: Optional[str]) -> Optional[WinProbabilityEstimate]:
    a = record_to_prob(away_record)
    h = record_to_prob(home_record)
    if a is None or h is None:
        return None
    return _normalized(a, h)


# ---------------- Blend ----------------
def blend(
    odds: Optional[WinProbabilityEstimate],
    records: Optional[WinProbabilityEstimate],
) -> Optional[Prediction]:
    """
    Mean of the available signals. Nothing is returned when neither
    signal is available; callers omit the predictor instead of showing 50/50.
    """
    sources: List[Any] = []
    if odds and records:
        away = (odds["awayPct"] + records["awayPct"]) / 2
        home = (odds["homePct"] + records["homePct"]) / 2
        method, sources = METHOD_BOTH, ["odds", "records"]
    elif odds:
        away, home = odds["awayPct"], odds["homePct"]
        method, sources = METHOD_ODDS, ["odds"]
    elif records:
        away, home = records["awayPct"], records["homePct"]
        method, sources = METHOD_RECORDS, ["records"]
    else:
        return None
    return {"awayPct": away, "homePct": home, "method": method, "sources": sources}


def predict_matchup(
    away_ml: Any,
    home_ml: Any,
    away_record: Optional[str],
    home_record: Optional[str],
) -> Optional[Prediction]:
    return blend(odds_signal(away_ml, home_ml), records_signal(away_record, home_record))
