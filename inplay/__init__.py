"""
In-play match analytics engine.

Free-text match report extraction, 1X2 odds de-vigging, a Poisson goal
model from historical averages and a per-minute dominance tracker.
Pure functions over plain records. No network, no storage.
"""
from inplay.errors import EmptyInputError, InplayError, InvalidInputError
from inplay.extractor import extract
from inplay.model import PoissonGoalModel, predict
from inplay.narrative import compare_to_expectation, describe_performance
from inplay.odds import normalize
from inplay.session import MatchSession
from inplay.state import (
    DominancePoint, Extraction, HistoricalAverages, LiveAnalysis, LiveStats,
    PoissonPrediction, PreMatchOdds, PreMatchProbs, TeamPair,
)
from inplay.tracker import LivePerformanceTracker, update

__all__ = [
    "EmptyInputError", "InplayError", "InvalidInputError",
    "extract", "normalize", "predict", "update",
    "describe_performance", "compare_to_expectation",
    "PoissonGoalModel", "LivePerformanceTracker", "MatchSession",
    "DominancePoint", "Extraction", "HistoricalAverages", "LiveAnalysis",
    "LiveStats", "PoissonPrediction", "PreMatchOdds", "PreMatchProbs", "TeamPair",
]
