"""
wayfinder.predictor -- ContextualPredictor: the public API for wayfinder.

    from wayfinder import ContextualPredictor

    engine = ContextualPredictor()
    path = engine.predict("vacation photos")
    path = engine.predict("build a web app", {"projectHints": ["react"]})

Everything is wired up here: knowledge tables, behavior store, the five
predictors, fusion and learning.  Callers only need to touch
ContextualPredictor.  ``None`` means "no opinion", never an error.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from wayfinder.behavior.store import BehaviorStore
from wayfinder.core.config import Config
from wayfinder.core.logging import configure_logging, event_fields
from wayfinder.core.types import BehaviorRecord, Candidate, PredictionContext
from wayfinder.knowledge.defaults import default_knowledge
from wayfinder.knowledge.tables import KnowledgeBase, load_knowledge
from wayfinder.signal.fusion import rank
from wayfinder.signal.learning import LearningFeedback
from wayfinder.signal.predictors import (
    BehaviorPredictor,
    DailyPredictor,
    Predictor,
    ProjectPredictor,
    SeasonalPredictor,
    TemporalPredictor,
)

log = logging.getLogger("wayfinder.predictor")

Clock = Callable[[], datetime]


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


class PredictionMetrics:
    """Counters for prediction outcomes.

    Call ``snapshot()`` to get current totals without resetting.
    """

    __slots__ = (
        "total_predictions",
        "contextual_hits",
        "misses",
        "predictor_errors",
        "learning_errors",
        "_lock",
    )

    def __init__(self) -> None:
        self.total_predictions: int = 0
        self.contextual_hits: int = 0
        self.misses: int = 0
        self.predictor_errors: int = 0
        self.learning_errors: int = 0
        self._lock = threading.Lock()

    def incr(self, name: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, name, getattr(self, name) + amount)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {
                "total_predictions": self.total_predictions,
                "contextual_hits": self.contextual_hits,
                "misses": self.misses,
                "predictor_errors": self.predictor_errors,
                "learning_errors": self.learning_errors,
            }


# ---------------------------------------------------------------------------
# ContextualPredictor
# ---------------------------------------------------------------------------


class ContextualPredictor:
    """Top-level API: predict a path for a query and learn from it.

    Parameters
    ----------
    config:
        Full ``Config`` object.  If not given, ``**kwargs`` are
        forwarded to ``Config``.
    knowledge:
        Pre-built knowledge tables.  Defaults to ``config.knowledge_path``
        when set, else the built-in tables.
    store:
        Behavior store to learn into (default: a fresh in-memory store).
    clock:
        ``() -> datetime`` used when no instant is passed
        (default ``datetime.now``).
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        knowledge: Optional[KnowledgeBase] = None,
        store: Optional[BehaviorStore] = None,
        clock: Optional[Clock] = None,
        **kwargs: Any,
    ) -> None:
        self.config = config if config is not None else Config(**kwargs)

        if self.config.structured_logging:
            configure_logging(structured=True, level=self.config.log_level)

        if knowledge is not None:
            self.knowledge = knowledge
        elif self.config.knowledge_path:
            self.knowledge = load_knowledge(self.config.knowledge_path, self.config)
        else:
            self.knowledge = default_knowledge(self.config)

        self.store = store if store is not None else BehaviorStore()
        self.clock: Clock = clock or datetime.now
        self.metrics = PredictionMetrics()

        threshold = self.config.fuzzy_threshold
        # Invocation order doubles as the tie-break order during fusion.
        self.predictors: Tuple[Predictor, ...] = (
            TemporalPredictor(self.knowledge.temporal, threshold),
            DailyPredictor(self.knowledge.daily, threshold),
            SeasonalPredictor(self.knowledge.seasonal, threshold),
            ProjectPredictor(self.knowledge.projects),
            BehaviorPredictor(self.store, threshold),
        )
        self.learner = LearningFeedback(
            self.store,
            seed_confidence=self.config.seed_confidence,
            delta=self.config.learn_delta,
            cap=self.config.confidence_cap,
        )

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    def predict(
        self,
        query: str,
        context: Any = None,
        *,
        now: Optional[datetime] = None,
    ) -> Optional[str]:
        """Predict the path *query* most likely refers to, or None.

        *context* may be a dict (``urgency``, ``projectHints``) or a
        ``PredictionContext``.  *now* pins the instant; the host clock
        is used otherwise.
        """
        return self.predict_contextual_path(query, now=now, context=context)

    def predict_contextual_path(
        self,
        query: str,
        now: Optional[datetime] = None,
        context: Any = None,
    ) -> Optional[str]:
        instant = now or self.clock()
        ctx = self._context(context)
        self.metrics.incr("total_predictions")

        candidates = self._collect(query, instant, ctx)
        if not candidates:
            self.metrics.incr("misses")
            log.debug(
                "No prediction for %r at %s",
                query,
                instant.isoformat(),
                extra=event_fields("miss", query, instant=instant),
            )
            return None

        best = rank(candidates, self.config.type_weights)[0]
        self.metrics.incr("contextual_hits")

        if self.config.auto_learn:
            self._learn_quietly(query, best, instant)

        log.debug(
            "Predicted %r -> %r (urgency=%r)",
            query,
            best.path,
            ctx.urgency,
            extra=event_fields("prediction", query, best, instant),
        )
        return best.path

    def explain(
        self,
        query: str,
        context: Any = None,
        *,
        now: Optional[datetime] = None,
    ) -> List[Candidate]:
        """Ranked candidates for *query*, best first.

        Read-only: nothing is learned and metrics are not touched.
        """
        instant = now or self.clock()
        candidates = self._collect(query, instant, self._context(context), count=False)
        return rank(candidates, self.config.type_weights)

    @staticmethod
    def _context(value: Any) -> PredictionContext:
        # An unusable context degrades to no hints; the query still counts.
        try:
            return PredictionContext.coerce(value)
        except TypeError:
            log.warning("Ignoring context of type %s", type(value).__name__)
            return PredictionContext()

    def _collect(
        self,
        query: str,
        instant: datetime,
        context: PredictionContext,
        count: bool = True,
    ) -> List[Candidate]:
        if not isinstance(query, str) or not query.strip():
            return []

        candidates: List[Candidate] = []
        for predictor in self.predictors:
            try:
                candidate = predictor.predict(query, instant, context)
            except Exception:
                if count:
                    self.metrics.incr("predictor_errors")
                log.warning(
                    "%s predictor failed for %r; skipping",
                    predictor.source,
                    query,
                    exc_info=True,
                    extra=event_fields(
                        "predictor_error", query, instant=instant, source=predictor.source
                    ),
                )
                continue
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------

    def learn(
        self,
        query: str,
        path: str,
        now: Optional[datetime] = None,
        source: str = "behavior",
    ) -> BehaviorRecord:
        """Record that *path* was accepted for *query* at *now*.

        For callers that confirm predictions themselves (``auto_learn``
        off) or that resolved the path some other way.
        """
        instant = now or self.clock()
        candidate = Candidate(path=path, confidence=1.0, source=source, reason="explicit feedback")
        return self.learner.learn(query, candidate, instant)

    def _learn_quietly(self, query: str, candidate: Candidate, instant: datetime) -> None:
        # Never changes the path already chosen.
        try:
            self.learner.learn(query, candidate, instant)
        except Exception:
            self.metrics.incr("learning_errors")
            log.warning(
                "Learning failed for %r -> %r",
                query,
                candidate.path,
                exc_info=True,
                extra=event_fields("learning_error", query, candidate, instant),
            )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def performance_report(self) -> Dict[str, Any]:
        """Prediction counters plus accuracy and store size."""
        report: Dict[str, Any] = self.metrics.snapshot()
        total = report["total_predictions"]
        report["contextual_accuracy"] = (
            report["contextual_hits"] / total * 100.0 if total else 0.0
        )
        report["behavior_patterns"] = len(self.store)
        return report
