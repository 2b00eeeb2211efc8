"""wayfinder.core — Configuration, type definitions, and logging."""

from wayfinder.core.config import Config
from wayfinder.core.logging import StructuredFormatter, configure_logging, event_fields
from wayfinder.core.types import (
    BEHAVIOR_CONFIDENCE_CAP,
    SOURCE_TYPES,
    TYPE_WEIGHTS,
    BehaviorRecord,
    BucketProfile,
    Candidate,
    PatternEntry,
    PredictionContext,
    ProjectProfile,
    bucket_key,
    weekday_of,
)

__all__ = [
    "Config",
    "StructuredFormatter",
    "configure_logging",
    "event_fields",
    "BEHAVIOR_CONFIDENCE_CAP",
    "SOURCE_TYPES",
    "TYPE_WEIGHTS",
    "BehaviorRecord",
    "BucketProfile",
    "Candidate",
    "PatternEntry",
    "PredictionContext",
    "ProjectProfile",
    "bucket_key",
    "weekday_of",
]
