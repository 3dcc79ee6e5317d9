import math

import pytest

from inplay.model import (
    GOAL_CAP, PoissonGoalModel, factorial, parse_average, poisson_pmf,
    predict, scoreline_grid,
)
from inplay.state import HistoricalAverages


def test_factorial_small_values():
    assert factorial(0) == 1
    assert factorial(1) == 1
    assert factorial(5) == 120
    assert factorial(8) == 40320


def test_factorial_negative_raises():
    with pytest.raises(ValueError):
        factorial(-1)


def test_poisson_pmf_matches_closed_form():
    assert poisson_pmf(1.5, 2) == pytest.approx(1.5 ** 2 * math.exp(-1.5) / 2)
    assert poisson_pmf(0.0, 0) == 1.0
    assert poisson_pmf(0.0, 3) == 0.0


def test_expected_goals_blend():
    pred = predict(1.5, 1.0, 1.0, 1.5)
    assert pred.expected_goals_home == 1.5
    assert pred.expected_goals_away == 1.0


def test_reference_prediction_top_scores():
    pred = predict(1.5, 1.0, 1.0, 1.5)
    top = [r.score for r in pred.most_probable_results]
    assert top[0] in ("1-0", "1-1")
    assert set(top[:2]) == {"1-0", "1-1"}
    assert pred.prob_home_win > pred.prob_away_win
    assert len(pred.most_probable_results) == 5


def test_top_scores_sorted_and_from_grid():
    pred = predict(1.8, 1.1, 1.2, 1.4)
    probs = [r.probability for r in pred.most_probable_results]
    assert probs == sorted(probs, reverse=True)
    grid = {c.score: c.probability for c in scoreline_grid(pred.expected_goals_home,
                                                           pred.expected_goals_away)}
    for r in pred.most_probable_results:
        assert grid[r.score] == r.probability


def test_grid_has_81_cells_and_mass_at_most_one():
    grid = scoreline_grid(2.4, 1.9)
    assert len(grid) == (GOAL_CAP + 1) ** 2 == 81
    total = sum(c.probability for c in grid)
    assert total <= 1.0 + 1e-12


@pytest.mark.parametrize("avgs", [
    (1.5, 1.0, 1.0, 1.5),
    (2.6, 0.7, 0.9, 2.2),
    (0.4, 0.3, 0.2, 0.5),
])
def test_outcomes_add_up_to_grid_mass(avgs):
    pred = predict(*avgs)
    mass = sum(c.probability for c in scoreline_grid(pred.expected_goals_home,
                                                     pred.expected_goals_away))
    assert pred.prob_home_win + pred.prob_draw + pred.prob_away_win == pytest.approx(mass)
    assert 0.0 <= pred.prob_over25 <= mass
    assert 0.0 <= pred.prob_btts <= mass


def test_small_lambdas_approach_full_mass():
    pred = predict(0.1, 0.1, 0.1, 0.1)
    assert pred.prob_home_win + pred.prob_draw + pred.prob_away_win == pytest.approx(1.0, abs=1e-12)


def test_zero_averages_give_certain_goalless_draw():
    pred = predict(0, 0, 0, 0)
    assert pred.prob_draw == 1.0
    assert pred.prob_over25 == 0.0
    assert pred.prob_btts == 0.0
    assert pred.most_probable_results[0].score == "0-0"


def test_large_lambdas_lose_mass_to_truncation():
    pred = predict(5.0, 5.0, 5.0, 5.0)
    assert pred.prob_home_win + pred.prob_draw + pred.prob_away_win < 0.99


def test_prediction_is_deterministic():
    assert predict(1.7, 0.9, 1.3, 1.2) == predict(1.7, 0.9, 1.3, 1.2)


@pytest.mark.parametrize("text,expected", [
    ("1,5", 1.5),
    (" 2.25 ", 2.25),
    ("1.4 goals", 1.4),
    ("", 0.0),
    ("n/a", 0.0),
    (None, 0.0),
    (1.75, 1.75),
])
def test_parse_average(text, expected):
    assert parse_average(text) == expected


def test_model_predicts_from_text_averages():
    averages = HistoricalAverages(hgf="1,5", hgc="1.0", agf="1", agc="1,5")
    pred = PoissonGoalModel().predict_from_averages(averages)
    assert pred == predict(1.5, 1.0, 1.0, 1.5)


def test_as_dict_lists_top_scores():
    data = predict(1.5, 1.0, 1.0, 1.5).as_dict()
    assert len(data["most_probable_results"]) == 5
    assert data["expected_goals_home"] == 1.5


def test_poisson_pmf_saturates_instead_of_overflowing():
    assert poisson_pmf(1e40, 0) == 0.0
    assert math.isnan(poisson_pmf(1e40, GOAL_CAP))
    assert math.isinf(poisson_pmf(-1000.0, 1))


def test_huge_averages_yield_non_finite_prediction():
    pred = predict(1e40, 1.0, 1.0, 1e40)
    assert pred.expected_goals_home == pytest.approx(1e40)
    assert math.isnan(pred.prob_home_win)
    assert len(pred.most_probable_results) == 5


def test_negative_averages_do_not_raise():
    pred = predict(-1000.0, 1.0, 1.0, -1000.0)
    assert math.isinf(pred.prob_draw) or math.isnan(pred.prob_draw)
