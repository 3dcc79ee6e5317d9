"""
Match session: the caller-side owner of engine state.

Holds the current inputs, the last model outputs and the threaded
LiveAnalysis for one match, and validates inputs before calling the
pure engine functions. The engine modules never see this object.
"""
import logging
from typing import Optional

import pandas as pd

from inplay import extractor, model, narrative, odds, tracker
from inplay.errors import InvalidInputError
from inplay.state import (
    DominancePoint, Extraction, HistoricalAverages, LiveAnalysis, LiveStats,
    PoissonPrediction, PreMatchOdds,
)

log = logging.getLogger("inplay.session")

NO_ANALYSIS_TEXT = "Update live analysis to generate."
NO_COMPARISON_TEXT = (
    "Generate a prediction and update live analysis to see comparison."
)


class MatchSession:
    """Mutable session for a single match, applied strictly in match order."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.odds = PreMatchOdds()
        self.averages = HistoricalAverages()
        self.live_stats = LiveStats.default()
        self.prediction: Optional[PoissonPrediction] = None
        self.analysis: Optional[LiveAnalysis] = None
        self.history: list[DominancePoint] = []

    # ── Inputs ───────────────────────────────────────────────────────

    def apply_text(self, text: str, keep_analysis: bool = False) -> Extraction:
        """Auto-fill from a match report.

        On EmptyInputError the session is left untouched. On success the
        live stats are replaced and extracted odds overwrite the stored
        prices (dropping stale probabilities). The threaded analysis is
        cleared unless ``keep_analysis`` is set, in which case the next
        update continues the momentum / peak chain.
        """
        result = extractor.extract(text)
        if result.pre_match_odds is not None:
            found = result.pre_match_odds
            self.odds = PreMatchOdds(home=found.home, draw=found.draw, away=found.away)
        self.live_stats = result.live_stats
        if not keep_analysis:
            self.analysis = None
        return result

    def set_live_stats(self, stats: LiveStats) -> None:
        """Replace the live counters (manual edit); the chain is kept."""
        self.live_stats = stats

    def set_odds(self, home: float, draw: float, away: float) -> None:
        self.odds = PreMatchOdds(home=home, draw=draw, away=away)

    def set_averages(self, hgf: str, hgc: str, agf: str, agc: str) -> None:
        self.averages = HistoricalAverages(hgf=str(hgf), hgc=str(hgc), agf=str(agf), agc=str(agc))

    # ── Engine calls ─────────────────────────────────────────────────

    def calculate_probabilities(self):
        """Normalize the stored odds.

        Raises:
            InvalidInputError: If any of the three prices is unset.
        """
        if not self.odds.is_complete:
            raise InvalidInputError("odds", "Please enter valid odds for Home, Draw, and Away.")
        self.odds = odds.with_probs(self.odds)
        log.info("pre-match probs | %s", self.odds.probs)
        return self.odds.probs

    def generate_prediction(self) -> PoissonPrediction:
        """Run the goal model on the stored averages.

        Raises:
            InvalidInputError: If any average is missing or zero.
        """
        a = self.averages
        values = [model.parse_average(v) for v in (a.hgf, a.hgc, a.agf, a.agc)]
        if any(v == 0 for v in values):
            raise InvalidInputError("averages", "Please enter all four historical average values.")
        self.prediction = model.predict(*values)
        log.info("prediction | %s", self.prediction)
        return self.prediction

    def update_analysis(self) -> LiveAnalysis:
        """Advance the tracker and record the dominance point for charting."""
        self.analysis = tracker.update(self.live_stats, self.analysis)
        if self.live_stats.minute > 0:
            self._record_point(DominancePoint(self.live_stats.minute,
                                              self.analysis.dominance.difference))
        return self.analysis

    def _record_point(self, point: DominancePoint) -> None:
        # One point per minute; a rewrite moves the minute to the end
        self.history = [p for p in self.history if p.minute != point.minute]
        self.history.append(point)

    # ── Outputs ──────────────────────────────────────────────────────

    def advanced_text(self) -> str:
        if self.analysis is None:
            return NO_ANALYSIS_TEXT
        return narrative.describe_performance(self.live_stats, self.analysis)

    def comparative_text(self) -> str:
        if self.analysis is None or self.prediction is None:
            return NO_COMPARISON_TEXT
        return narrative.compare_to_expectation(self.live_stats, self.analysis, self.prediction)

    def dominance_frame(self) -> pd.DataFrame:
        """Dominance history as a (minute, difference) frame."""
        return pd.DataFrame(
            [{"minute": p.minute, "difference": p.difference} for p in self.history],
            columns=["minute", "difference"],
        )
