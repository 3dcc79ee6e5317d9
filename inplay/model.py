"""
Pre-match goal model.

Independent (bivariate) Poisson model fitted from four historical
scoring averages:

    λ_home = (home goals for + away goals against) / 2
    λ_away = (away goals for + home goals against) / 2

The joint scoreline distribution is enumerated over a fixed 9×9 grid
(0–8 goals per side). Mass above 8 goals is not modeled, so the 1X2
probabilities sum to the grid mass, slightly below 1 for large λ.

No API calls. Pure model layer.
"""
import logging
import math
import re
from typing import Union

from inplay.state import HistoricalAverages, PoissonPrediction, ScorelineProbability

log = logging.getLogger("inplay.model")


# ═══════════════════════════════════════════════════════════════════════
#  Tunable Constants
# ═══════════════════════════════════════════════════════════════════════

GOAL_CAP = 8
"""Maximum goals per team in the scoreline grid."""

TOP_SCORELINES = 5
"""Number of most likely exact scores returned."""

OVER_UNDER_LINE = 2.5

_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


# ═══════════════════════════════════════════════════════════════════════
#  Poisson Primitives
# ═══════════════════════════════════════════════════════════════════════

def factorial(n: int) -> int:
    """Iterative n! for the small k used by the grid.

    Raises:
        ValueError: If n is negative.
    """
    if n < 0:
        raise ValueError(f"factorial of negative number: {n}")
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def poisson_pmf(lam: float, k: int) -> float:
    """Poisson probability mass function P(X=k | λ) = λ^k e^-λ / k!.

    Out-of-range λ never raises: overflowing terms saturate to ±inf, so a
    huge λ yields nan/0.0 masses and a negative λ yields inf.
    """
    try:
        power = lam ** k
    except OverflowError:
        power = math.copysign(math.inf, lam) if k % 2 else math.inf
    try:
        decay = math.exp(-lam)
    except OverflowError:
        decay = math.inf
    return power * decay / factorial(k)


def scoreline_grid(lam_h: float, lam_a: float, cap: int = GOAL_CAP) -> list[ScorelineProbability]:
    """All (cap+1)² exact scores, home-goals major order."""
    pmf_h = [poisson_pmf(lam_h, k) for k in range(cap + 1)]
    pmf_a = [poisson_pmf(lam_a, k) for k in range(cap + 1)]
    return [
        ScorelineProbability(f"{h}-{a}", pmf_h[h] * pmf_a[a])
        for h in range(cap + 1)
        for a in range(cap + 1)
    ]


def parse_average(value: Union[str, float, int, None]) -> float:
    """Coerce a typed average ("1,4", " 1.4 ", "") to float, 0.0 on failure."""
    if value is None:
        return 0.0
    text = str(value).replace(",", ".", 1).strip()
    m = _FLOAT_PREFIX_RE.match(text)
    if not m:
        return 0.0
    try:
        return float(m.group(0))
    except ValueError:
        return 0.0


# ═══════════════════════════════════════════════════════════════════════
#  Core Model
# ═══════════════════════════════════════════════════════════════════════

def predict(hgf: float, hgc: float, agf: float, agc: float) -> PoissonPrediction:
    """Scoreline distribution from historical goal averages.

    Args:
        hgf: Home team average goals scored.
        hgc: Home team average goals conceded.
        agf: Away team average goals scored.
        agc: Away team average goals conceded.

    Returns:
        PoissonPrediction with 1X2, over 2.5, BTTS and the top 5 scores.
    """
    lam_h = (hgf + agc) / 2
    lam_a = (agf + hgc) / 2

    p_home = p_draw = p_away = 0.0
    p_over = p_btts = 0.0

    cells = scoreline_grid(lam_h, lam_a)

    for idx, cell in enumerate(cells):
        h, a = divmod(idx, GOAL_CAP + 1)
        joint = cell.probability

        if h > a:
            p_home += joint
        elif h == a:
            p_draw += joint
        else:
            p_away += joint
        if h + a > OVER_UNDER_LINE:
            p_over += joint
        if h > 0 and a > 0:
            p_btts += joint

    # Stable sort: equal probabilities keep grid order
    ranked = sorted(cells, key=lambda c: c.probability, reverse=True)

    prediction = PoissonPrediction(
        expected_goals_home=lam_h,
        expected_goals_away=lam_a,
        prob_home_win=p_home,
        prob_draw=p_draw,
        prob_away_win=p_away,
        prob_over25=p_over,
        prob_btts=p_btts,
        most_probable_results=tuple(ranked[:TOP_SCORELINES]),
    )
    log.debug("predict | avgs=(%s, %s, %s, %s) → %s", hgf, hgc, agf, agc, prediction)
    return prediction


class PoissonGoalModel:
    """Stateless, deterministic pre-match goal model.

    Usage:
        model = PoissonGoalModel()
        pred = model.predict(1.5, 1.0, 1.0, 1.5)
        print(pred)
    """

    def predict(self, hgf: float, hgc: float, agf: float, agc: float) -> PoissonPrediction:
        return predict(hgf, hgc, agf, agc)

    def predict_from_averages(self, averages: HistoricalAverages) -> PoissonPrediction:
        """Predict from text inputs, coercing each with ``parse_average``."""
        return predict(
            parse_average(averages.hgf),
            parse_average(averages.hgc),
            parse_average(averages.agf),
            parse_average(averages.agc),
        )
