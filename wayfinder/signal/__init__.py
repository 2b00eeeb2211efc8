"""
wayfinder.signal — Candidate prediction, fusion and learning.

Public API:
  TemporalPredictor, DailyPredictor, SeasonalPredictor
                     — knowledge-table predictors
  ProjectPredictor   — project keyword predictor
  BehaviorPredictor  — learned-behavior predictor
  rank(), select_best()
                     — weighted fusion of candidates
  LearningFeedback   — reinforcement of behavior records
"""

from wayfinder.signal.fusion import rank, select_best
from wayfinder.signal.learning import LearningFeedback
from wayfinder.signal.predictors import (
    BehaviorPredictor,
    BucketPredictor,
    DailyPredictor,
    Predictor,
    ProjectPredictor,
    SeasonalPredictor,
    TemporalPredictor,
)

__all__ = [
    "rank",
    "select_best",
    "LearningFeedback",
    "BehaviorPredictor",
    "BucketPredictor",
    "DailyPredictor",
    "Predictor",
    "ProjectPredictor",
    "SeasonalPredictor",
    "TemporalPredictor",
]
