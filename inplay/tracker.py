"""
Live performance tracker.

Weighted attacking-event intensity per minute for each side, its change
since the previous snapshot (momentum), session peaks of the dominance
difference, and shot precision.

    raw_x       = 3.0·on + 0.5·off + 1.0·corners
                  + 0.75·dangerous + 0.2·max(0, attacks − dangerous)
    intensity_x = raw_x / max(minute, 1)
    difference  = intensity_home − intensity_away

The tracker holds no state. The caller threads the previous
LiveAnalysis back in on every call, strictly in match order.
"""
import logging
from typing import Optional

from inplay.state import Dominance, LiveAnalysis, LiveStats, TeamPair

log = logging.getLogger("inplay.tracker")


# ═══════════════════════════════════════════════════════════════════════
#  Event Weights
# ═══════════════════════════════════════════════════════════════════════

WEIGHT_ON_TARGET = 3.0
WEIGHT_OFF_TARGET = 0.5
WEIGHT_CORNER = 1.0
WEIGHT_ATTACK = 0.2
WEIGHT_DANGEROUS_ATTACK = 0.75

# ── Interpretation bands (narrative output depends on these) ─────────
DOMINANCE_CRUSHING = 0.4
DOMINANCE_CLEAR = 0.2
DOMINANCE_SLIGHT = 0.05
MOMENTUM_STRONG = 0.1
MOMENTUM_IMPROVING = 0.02


# ═══════════════════════════════════════════════════════════════════════
#  Components
# ═══════════════════════════════════════════════════════════════════════

def raw_intensity(on_target: int, off_target: int, corners: int,
                  attacks: int, dangerous_attacks: int) -> float:
    """Cumulative weighted event score for one side."""
    non_dangerous = max(0, attacks - dangerous_attacks)
    attack_points = (dangerous_attacks * WEIGHT_DANGEROUS_ATTACK
                     + non_dangerous * WEIGHT_ATTACK)
    return (on_target * WEIGHT_ON_TARGET
            + off_target * WEIGHT_OFF_TARGET
            + corners * WEIGHT_CORNER
            + attack_points)


def shot_precision(on_target: int, off_target: int) -> float:
    """Percentage of shots on target; 0.0 when no shots were taken."""
    total = on_target + off_target
    return (on_target / total) * 100 if total > 0 else 0.0


# ═══════════════════════════════════════════════════════════════════════
#  Core Update
# ═══════════════════════════════════════════════════════════════════════

def update(stats: LiveStats, previous: Optional[LiveAnalysis] = None) -> LiveAnalysis:
    """Compute a new snapshot from live stats and the previous snapshot.

    Args:
        stats:    Current cumulative counters.
        previous: Snapshot returned by the previous call, or None at the
                  start of a session.

    Returns:
        New LiveAnalysis. Momentum is zero when ``previous`` is None.
    """
    raw_h = raw_intensity(stats.on_target.home, stats.off_target.home,
                          stats.corners.home, stats.attacks.home,
                          stats.dangerous_attacks.home)
    raw_a = raw_intensity(stats.on_target.away, stats.off_target.away,
                          stats.corners.away, stats.attacks.away,
                          stats.dangerous_attacks.away)

    minute_factor = stats.minute if stats.minute > 0 else 1
    dom_h = raw_h / minute_factor
    dom_a = raw_a / minute_factor
    diff = dom_h - dom_a

    if previous is not None:
        momentum = TeamPair(dom_h - previous.dominance.home,
                            dom_a - previous.dominance.away)
        max_h = previous.dominance.max_home
        max_a = previous.dominance.max_away
    else:
        momentum = TeamPair(0.0, 0.0)
        max_h = max_a = 0.0

    new_max_h = new_max_a = False
    if diff > 0 and diff > max_h:
        max_h = diff
        new_max_h = True
    if diff < 0 and diff < max_a:
        max_a = diff
        new_max_a = True

    analysis = LiveAnalysis(
        dominance=Dominance(
            home=dom_h,
            away=dom_a,
            difference=diff,
            max_home=max_h,
            max_away=max_a,
            new_max_home=new_max_h,
            new_max_away=new_max_a,
        ),
        momentum=momentum,
        precision=TeamPair(
            shot_precision(stats.on_target.home, stats.off_target.home),
            shot_precision(stats.on_target.away, stats.off_target.away),
        ),
    )

    if new_max_h or new_max_a:
        log.info("NEW PEAK | min=%d' %s", stats.minute, analysis)
    else:
        log.debug("update | min=%d' %s", stats.minute, analysis)
    return analysis


class LivePerformanceTracker:
    """Stateless wrapper around ``update`` for callers that want an object.

    Usage:
        tracker = LivePerformanceTracker()
        first = tracker.update(stats_20)
        second = tracker.update(stats_30, previous=first)
    """

    def update(self, stats: LiveStats, previous: Optional[LiveAnalysis] = None) -> LiveAnalysis:
        return update(stats, previous)


# ═══════════════════════════════════════════════════════════════════════
#  Interpretation Bands
# ═══════════════════════════════════════════════════════════════════════

def dominance_band(difference: float) -> str:
    """Band label for abs(difference): crushing, clear, slight or balanced."""
    dom_abs = abs(difference)
    if dom_abs > DOMINANCE_CRUSHING:
        return "crushing"
    if dom_abs > DOMINANCE_CLEAR:
        return "clear"
    if dom_abs > DOMINANCE_SLIGHT:
        return "slight"
    return "balanced"


def momentum_band(value: float) -> str:
    """Band label for a momentum value: strong rise, improving or stable."""
    if value > MOMENTUM_STRONG:
        return "strong rise"
    if value > MOMENTUM_IMPROVING:
        return "improving"
    return "stable"


def dominance_side(difference: float) -> str:
    """Side favored by the sign of the difference; zero reads as Away."""
    return "Home" if difference > 0 else "Away"
