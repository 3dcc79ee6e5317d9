"""
Plain-text match narratives built from tracker and model outputs.

Deterministic string builders; the band thresholds live in
``inplay.tracker`` so the labels always agree with the numbers.
"""
from inplay.state import LiveAnalysis, LiveStats, PoissonPrediction
from inplay.tracker import dominance_band, dominance_side, momentum_band

FULL_TIME_MINUTES = 90
OVERPERFORMANCE_MARGIN = 0.5
FAVORITE_GAP = 0.15
LIVE_LEADER_THRESHOLD = 0.1
LEVEL_MISMATCH_THRESHOLD = 0.2
SURPRISE_THRESHOLD = 0.15

_DOMINANCE_TEXT = {
    "crushing": "CRUSHING DOMINANCE by {side}",
    "clear": "CLEAR DOMINANCE by {side}",
    "slight": "SLIGHT SUPERIORITY of {side}",
    "balanced": "Balanced Match",
}

_MOMENTUM_TEXT = {
    "strong rise": "Strong Rise",
    "improving": "Improving",
    "stable": "Stable",
}


def match_phase(minute: int) -> str:
    if minute < 15:
        return "Initial"
    if minute < 45:
        return "First Half"
    if minute < 75:
        return "Decisive"
    return "Final Stretch"


def describe_performance(stats: LiveStats, analysis: LiveAnalysis) -> str:
    """Phase, dominance, momentum and score-vs-stats summary."""
    minute, score = stats.minute, stats.score
    dominance, momentum = analysis.dominance, analysis.momentum
    side = dominance_side(dominance.difference)
    text = []

    text.append(f"▶ PHASE (Min {minute}): {match_phase(minute)}")

    dom_desc = _DOMINANCE_TEXT[dominance_band(dominance.difference)].format(side=side)
    text.append(f"▶ DOMINANCE (Intensity/Min): {dom_desc}")
    text.append(
        f"  Scores: H {dominance.home:.2f} | A {dominance.away:.2f} "
        f"| Diff: {dominance.difference:.2f}"
    )

    mom_h = _MOMENTUM_TEXT[momentum_band(momentum.home)]
    mom_a = _MOMENTUM_TEXT[momentum_band(momentum.away)]
    text.append(f"▶ MOMENTUM: H {mom_h} | A {mom_a}")

    text.append("▶ SCORE vs STATS:")
    if score.home == score.away and abs(dominance.difference) > LEVEL_MISMATCH_THRESHOLD:
        text.append(f"  - MISMATCH: Score is level, but {side} is dominating.")
    elif ((score.home > score.away and dominance.difference < -SURPRISE_THRESHOLD)
          or (score.away > score.home and dominance.difference > SURPRISE_THRESHOLD)):
        text.append("  - SURPRISE: The losing team is statistically dominating.")
    else:
        text.append("  - The score seems consistent with performance.")

    return "\n".join(text)


def pre_match_favorite(prediction: PoissonPrediction) -> str:
    """Home or Away when one win probability leads by more than 0.15."""
    if prediction.prob_home_win > prediction.prob_away_win + FAVORITE_GAP:
        return "Home"
    if prediction.prob_away_win > prediction.prob_home_win + FAVORITE_GAP:
        return "Away"
    return "Balanced"


def live_leader(analysis: LiveAnalysis) -> str:
    diff = analysis.dominance.difference
    if diff > LIVE_LEADER_THRESHOLD:
        return "Home"
    if diff < -LIVE_LEADER_THRESHOLD:
        return "Away"
    return "Balanced"


def compare_to_expectation(stats: LiveStats, analysis: LiveAnalysis,
                           prediction: PoissonPrediction) -> str:
    """Actual goals vs time-scaled expected goals, and the match script."""
    score, minute = stats.score, stats.minute
    text = []

    progress = min(minute / FULL_TIME_MINUTES, 1)
    exp_h = prediction.expected_goals_home * progress
    exp_a = prediction.expected_goals_away * progress

    text.append(f"▶ GOAL PERFORMANCE (vs Expected for min {minute})")
    text.append(f"  - HOME: Actual {score.home} vs Exp {exp_h:.2f} (Diff: {score.home - exp_h:.2f})")
    text.append(f"  - AWAY: Actual {score.away} vs Exp {exp_a:.2f} (Diff: {score.away - exp_a:.2f})")
    if score.home - exp_h > OVERPERFORMANCE_MARGIN:
        text.append("    ↳ Home is overperforming goal expectation.")
    if score.away - exp_a > OVERPERFORMANCE_MARGIN:
        text.append("    ↳ Away is overperforming goal expectation.")

    text.append("\n▶ MATCH SCRIPT ANALYSIS:")
    favorite = pre_match_favorite(prediction)
    leader = live_leader(analysis)

    if favorite == leader and favorite != "Balanced":
        text.append(f"  - LOGIC CONFIRMED: The pre-match favorite ({favorite}) is dominating as expected.")
    elif favorite != "Balanced" and leader not in (favorite, "Balanced"):
        text.append(f"  - SCRIPT INVERTED: The underdog ({leader}) is controlling the game, against predictions.")
    elif leader != "Balanced" and (
        score.home <= score.away if leader == "Home" else score.away <= score.home
    ):
        text.append(f"  - DOMINANCE W/O REWARD: {leader} is dominating but failing to convert.")
    else:
        text.append("  - OPEN MATCH: No clear pattern has emerged, or the match is balanced as predicted.")

    return "\n".join(text)
