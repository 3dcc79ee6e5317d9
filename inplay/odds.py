"""
Pre-match 1X2 odds normalization.

Decimal odds → implied probabilities with the bookmaker overround
removed proportionally:

    s       = 1/h + 1/d + 1/a
    margin  = (s − 1) × 100
    p_x     = (1/x) / s

No validation is done here. Zero odds are a caller bug and come back as
non-finite values rather than an exception.
"""
import logging
import math

from inplay.state import PreMatchOdds, PreMatchProbs

log = logging.getLogger("inplay.odds")


def implied_probability(decimal_odds: float) -> float:
    """Raw implied probability 1/odds, margin included."""
    if decimal_odds == 0:
        return math.copysign(math.inf, decimal_odds)
    return 1.0 / decimal_odds


def normalize(odds_home: float, odds_draw: float, odds_away: float) -> PreMatchProbs:
    """De-vig three decimal odds into probabilities that sum to 1."""
    inv_h = implied_probability(odds_home)
    inv_d = implied_probability(odds_draw)
    inv_a = implied_probability(odds_away)
    s = inv_h + inv_d + inv_a

    probs = PreMatchProbs(
        home=_ratio(inv_h, s),
        draw=_ratio(inv_d, s),
        away=_ratio(inv_a, s),
        margin=(s - 1.0) * 100.0,
    )
    log.debug("normalize | odds=(%s, %s, %s) → %s", odds_home, odds_draw, odds_away, probs)
    return probs


def _ratio(num: float, den: float) -> float:
    if den == 0:
        return math.nan if num == 0 else math.copysign(math.inf, num)
    return num / den


def with_probs(odds: PreMatchOdds) -> PreMatchOdds:
    """Copy of ``odds`` with ``probs`` recomputed from the three prices."""
    return PreMatchOdds(
        home=odds.home,
        draw=odds.draw,
        away=odds.away,
        probs=normalize(odds.home, odds.draw, odds.away),
    )


def fair_odds(probs: PreMatchProbs) -> tuple[float, float, float]:
    """Margin-free decimal odds for (home, draw, away)."""
    return (
        implied_probability(probs.home),
        implied_probability(probs.draw),
        implied_probability(probs.away),
    )
