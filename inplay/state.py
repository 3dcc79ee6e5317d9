"""
In-play engine records.

These are pure data containers with no logic beyond construction helpers
and serialization. Every record is an immutable snapshot; callers
replace them wholesale instead of patching fields.
"""
from dataclasses import dataclass, fields
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


# ═══════════════════════════════════════════════════════════════════════
#  Shared
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TeamPair(Generic[T]):
    """Ordered (home, away) pair used for every per-team statistic."""
    home: T
    away: T

    def as_dict(self) -> dict:
        return {"home": self.home, "away": self.away}


def _zero_pair() -> TeamPair[int]:
    return TeamPair(0, 0)


# ═══════════════════════════════════════════════════════════════════════
#  Input: Live Match Counters
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LiveStats:
    """Cumulative live counters for one match at one point in time.

    Attributes:
        attacks:            All attacks, dangerous ones included.
        dangerous_attacks:  Dangerous attacks only.
        on_target:          Shots on target.
        off_target:         Shots off target.
        corners:            Corner kicks.
        possession:         Ball possession percentage.
        yellow_cards:       Yellow cards received.
        red_cards:          Red cards received.
        score:              Current scoreline.
        minute:             Match minute (0–90+). Not checked for monotonicity.
    """
    attacks: TeamPair[int]
    dangerous_attacks: TeamPair[int]
    on_target: TeamPair[int]
    off_target: TeamPair[int]
    corners: TeamPair[int]
    possession: TeamPair[int]
    yellow_cards: TeamPair[int]
    red_cards: TeamPair[int]
    score: TeamPair[int]
    minute: int = 0

    @classmethod
    def default(cls) -> "LiveStats":
        """All-zero record used at kickoff and as the merge base."""
        return cls(**{f.name: _zero_pair() for f in fields(cls) if f.name != "minute"})

    @classmethod
    def merged(cls, partial: dict) -> "LiveStats":
        """Build a complete record from a partial field mapping.

        Missing (or None) fields take the zero defaults; unknown keys are
        a programming error and raise ValueError.
        """
        names = {f.name for f in fields(cls)}
        unknown = set(partial) - names
        if unknown:
            raise ValueError(f"unknown LiveStats fields: {sorted(unknown)}")

        base = cls.default()
        values = {}
        for name in names:
            value = partial.get(name)
            values[name] = value if value is not None else getattr(base, name)
        return cls(**values)

    def as_dict(self) -> dict:
        out: dict = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = value.as_dict() if isinstance(value, TeamPair) else value
        return out

    def __str__(self) -> str:
        return (
            f"min={self.minute}' score={self.score.home}-{self.score.away} | "
            f"att={self.attacks.home}/{self.attacks.away} "
            f"dang={self.dangerous_attacks.home}/{self.dangerous_attacks.away} "
            f"on={self.on_target.home}/{self.on_target.away} "
            f"off={self.off_target.home}/{self.off_target.away} "
            f"cor={self.corners.home}/{self.corners.away}"
        )


# ═══════════════════════════════════════════════════════════════════════
#  Pre-Match Market
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PreMatchProbs:
    """De-vigged 1X2 probabilities plus the bookmaker margin in percent."""
    home: float
    draw: float
    away: float
    margin: float

    def as_dict(self) -> dict:
        return {
            "home": round(self.home, 6),
            "draw": round(self.draw, 6),
            "away": round(self.away, 6),
            "margin": round(self.margin, 4),
        }

    def __str__(self) -> str:
        return (
            f"H={self.home:.4f}  D={self.draw:.4f}  A={self.away:.4f} | "
            f"margin={self.margin:.2f}%"
        )


@dataclass(frozen=True)
class PartialOdds:
    """1X2 decimal odds as found in a match report."""
    home: float
    draw: float
    away: float

    def as_dict(self) -> dict:
        return {"home": self.home, "draw": self.draw, "away": self.away}


@dataclass(frozen=True)
class PreMatchOdds:
    """Decimal 1X2 odds. ``probs`` is only set by explicit normalization."""
    home: float = 0.0
    draw: float = 0.0
    away: float = 0.0
    probs: Optional[PreMatchProbs] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.home and self.draw and self.away)

    def as_dict(self) -> dict:
        return {
            "home": self.home,
            "draw": self.draw,
            "away": self.away,
            "probs": self.probs.as_dict() if self.probs else None,
        }


@dataclass(frozen=True)
class HistoricalAverages:
    """Average goals for/against, kept as typed text (``1,4`` or ``1.4``)."""
    hgf: str = ""
    hgc: str = ""
    agf: str = ""
    agc: str = ""


# ═══════════════════════════════════════════════════════════════════════
#  Output: Goal Model
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ScorelineProbability:
    score: str          # "home-away", e.g. "1-0"
    probability: float

    def as_dict(self) -> dict:
        return {"score": self.score, "probability": round(self.probability, 6)}


@dataclass(frozen=True)
class PoissonPrediction:
    """Full-time outcome, totals and exact-score probabilities."""
    expected_goals_home: float
    expected_goals_away: float
    prob_home_win: float
    prob_draw: float
    prob_away_win: float
    prob_over25: float
    prob_btts: float
    most_probable_results: tuple[ScorelineProbability, ...]

    def as_dict(self) -> dict:
        return {
            "expected_goals_home": round(self.expected_goals_home, 4),
            "expected_goals_away": round(self.expected_goals_away, 4),
            "prob_home_win": round(self.prob_home_win, 6),
            "prob_draw": round(self.prob_draw, 6),
            "prob_away_win": round(self.prob_away_win, 6),
            "prob_over25": round(self.prob_over25, 6),
            "prob_btts": round(self.prob_btts, 6),
            "most_probable_results": [r.as_dict() for r in self.most_probable_results],
        }

    def __str__(self) -> str:
        top = ", ".join(f"{r.score}@{r.probability:.3f}" for r in self.most_probable_results)
        return (
            f"λH={self.expected_goals_home:.2f}  λA={self.expected_goals_away:.2f} | "
            f"H={self.prob_home_win:.4f}  D={self.prob_draw:.4f}  A={self.prob_away_win:.4f} | "
            f"O2.5={self.prob_over25:.4f}  BTTS={self.prob_btts:.4f} | top: {top}"
        )


# ═══════════════════════════════════════════════════════════════════════
#  Output: Live Analysis
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Dominance:
    """Per-minute intensity for each side plus session peaks.

    ``max_home`` is the largest positive difference seen so far,
    ``max_away`` the most negative one. The ``new_max_*`` flags mark the
    snapshot that set the peak.
    """
    home: float
    away: float
    difference: float
    max_home: float = 0.0
    max_away: float = 0.0
    new_max_home: bool = False
    new_max_away: bool = False


@dataclass(frozen=True)
class LiveAnalysis:
    """One tracker snapshot. Thread it back as ``previous`` on the next call."""
    dominance: Dominance
    momentum: TeamPair[float]
    precision: TeamPair[float]

    def as_dict(self) -> dict:
        d = self.dominance
        return {
            "dominance": {
                "home": round(d.home, 4),
                "away": round(d.away, 4),
                "difference": round(d.difference, 4),
                "max_home": round(d.max_home, 4),
                "max_away": round(d.max_away, 4),
                "new_max_home": d.new_max_home,
                "new_max_away": d.new_max_away,
            },
            "momentum": {
                "home": round(self.momentum.home, 4),
                "away": round(self.momentum.away, 4),
            },
            "precision": {
                "home": round(self.precision.home, 2),
                "away": round(self.precision.away, 2),
            },
        }

    def __str__(self) -> str:
        d = self.dominance
        return (
            f"dom H={d.home:.3f}  A={d.away:.3f}  diff={d.difference:+.3f} | "
            f"peaks H={d.max_home:.3f}{'*' if d.new_max_home else ''}  "
            f"A={d.max_away:.3f}{'*' if d.new_max_away else ''} | "
            f"mom H={self.momentum.home:+.3f}  A={self.momentum.away:+.3f} | "
            f"prec H={self.precision.home:.1f}%  A={self.precision.away:.1f}%"
        )


@dataclass(frozen=True)
class DominancePoint:
    minute: int
    difference: float


# ═══════════════════════════════════════════════════════════════════════
#  Output: Text Extraction
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Extraction:
    """Result of parsing one match report. ``live_stats`` is always complete."""
    live_stats: LiveStats
    pre_match_odds: Optional[PartialOdds] = None

    def as_dict(self) -> dict:
        return {
            "pre_match_odds": self.pre_match_odds.as_dict() if self.pre_match_odds else None,
            "live_stats": self.live_stats.as_dict(),
        }
