"""
Wayfinder -- Context-aware path prediction.

    from wayfinder import ContextualPredictor

    engine = ContextualPredictor()
    engine.predict("vacation photos")        # -> ".../Pictures" in summer
    engine.predict("zzqx")                   # -> None (no opinion)
"""

from wayfinder.core.config import Config
from wayfinder.core.types import (
    BehaviorRecord,
    Candidate,
    PredictionContext,
)
from wayfinder.matching.similarity import matches
from wayfinder.predictor import ContextualPredictor

__version__ = "0.1.0"

__all__ = [
    "ContextualPredictor",
    "Config",
    "BehaviorRecord",
    "Candidate",
    "PredictionContext",
    "matches",
]
