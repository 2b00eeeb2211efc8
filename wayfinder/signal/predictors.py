"""
wayfinder.signal.predictors — Independent path predictors.

Each predictor looks at the query and the current instant from one
angle and proposes at most one ``Candidate``:

  - TemporalPredictor  — time-of-day profiles
  - DailyPredictor     — weekday / weekend profiles
  - SeasonalPredictor  — month / season profiles
  - ProjectPredictor   — project keyword profiles
  - BehaviorPredictor  — learned ``(weekday, hour)`` records

Predictors never aggregate; combining proposals is the job of
``wayfinder.signal.fusion``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from wayfinder.behavior.store import BehaviorStore
from wayfinder.core.types import Candidate, PredictionContext, bucket_key
from wayfinder.knowledge.tables import KnowledgeTable, ProjectTable
from wayfinder.matching.similarity import DEFAULT_THRESHOLD, matches

log = logging.getLogger(__name__)


class Predictor:
    """Interface: ``predict(query, instant, context) -> Candidate | None``."""

    source: str = ""

    def predict(
        self,
        query: str,
        instant: datetime,
        context: Optional[PredictionContext] = None,
    ) -> Optional[Candidate]:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Bucket-table predictors (temporal / daily / seasonal)
# ---------------------------------------------------------------------------


class BucketPredictor(Predictor):
    """
    Scan the profiles active at an instant for the first matching label.

    Parameters
    ----------
    source : str
        Candidate source type this predictor reports.
    table : KnowledgeTable
        Profiles to consult.
    threshold : float
        Fuzzy threshold passed to ``matches()``.
    """

    def __init__(
        self,
        source: str,
        table: KnowledgeTable,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self.source = source
        self.table = table
        self.threshold = threshold

    def describe(self, profile_name: str, instant: datetime) -> str:
        return f"{self.source} ({profile_name})"

    def predict(
        self,
        query: str,
        instant: datetime,
        context: Optional[PredictionContext] = None,
    ) -> Optional[Candidate]:
        for profile in self.table.profiles_active_at(instant):
            for entry in profile.patterns:
                if matches(query, entry.label, self.threshold):
                    return Candidate(
                        path=entry.path,
                        confidence=profile.confidence,
                        source=self.source,
                        reason=f"{self.describe(profile.name, instant)}: {entry.label!r}",
                    )
        return None


class TemporalPredictor(BucketPredictor):
    def __init__(self, table: KnowledgeTable, threshold: float = DEFAULT_THRESHOLD) -> None:
        super().__init__("temporal", table, threshold)

    def describe(self, profile_name: str, instant: datetime) -> str:
        return f"time of day ({profile_name}, {instant.hour:02d}h)"


class DailyPredictor(BucketPredictor):
    def __init__(self, table: KnowledgeTable, threshold: float = DEFAULT_THRESHOLD) -> None:
        super().__init__("daily", table, threshold)

    def describe(self, profile_name: str, instant: datetime) -> str:
        return f"day of week ({profile_name})"


class SeasonalPredictor(BucketPredictor):
    def __init__(self, table: KnowledgeTable, threshold: float = DEFAULT_THRESHOLD) -> None:
        super().__init__("seasonal", table, threshold)

    def describe(self, profile_name: str, instant: datetime) -> str:
        return f"season ({profile_name})"


# ---------------------------------------------------------------------------
# ProjectPredictor
# ---------------------------------------------------------------------------


class ProjectPredictor(Predictor):
    """
    First project profile with a keyword inside the query wins.

    Keywords are exact domain terms, so plain case-insensitive
    substring containment is used rather than the fuzzy matcher.  When
    the query names no project, the caller's ``project_hints`` are
    tried the same way, in order.
    """

    source = "project"

    def __init__(self, table: ProjectTable) -> None:
        self.table = table

    def _match(self, text: str) -> Optional[Candidate]:
        for profile in self.table.profiles:
            keyword = profile.first_keyword_in(text)
            if keyword is not None:
                return Candidate(
                    path=profile.path,
                    confidence=profile.confidence,
                    source=self.source,
                    reason=f"project context ({profile.name}, keyword {keyword!r})",
                )
        return None

    def predict(
        self,
        query: str,
        instant: datetime,
        context: Optional[PredictionContext] = None,
    ) -> Optional[Candidate]:
        candidate = self._match(query)
        if candidate is not None or context is None:
            return candidate

        for hint in context.project_hints:
            candidate = self._match(hint)
            if candidate is not None:
                candidate.reason += f" via hint {hint!r}"
                return candidate
        return None


# ---------------------------------------------------------------------------
# BehaviorPredictor
# ---------------------------------------------------------------------------


class BehaviorPredictor(Predictor):
    """Propose the path learned for the current ``(weekday, hour)`` bucket."""

    source = "behavior"

    def __init__(self, store: BehaviorStore, threshold: float = DEFAULT_THRESHOLD) -> None:
        self.store = store
        self.threshold = threshold

    def predict(
        self,
        query: str,
        instant: datetime,
        context: Optional[PredictionContext] = None,
    ) -> Optional[Candidate]:
        weekday, hour = bucket_key(instant)
        record = self.store.get(weekday, hour)
        if record is None:
            return None
        if not matches(query, record.pattern, self.threshold):
            return None
        return Candidate(
            path=record.path,
            confidence=record.confidence,
            source=self.source,
            reason=f"learned behavior (used {record.frequency}x)",
        )
