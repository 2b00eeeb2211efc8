"""
wayfinder.signal.learning — Online reinforcement of behavior records.

Every accepted prediction strengthens the ``(weekday, hour)`` bucket it
was made in, whichever predictor produced it:

    frequency  += 1
    confidence  = min(confidence + delta, cap)

A bucket seen for the first time is seeded with the lower-cased query,
the accepted path, frequency 0 and ``seed_confidence`` before the
update is applied.  After ``n`` updates the record therefore holds
``frequency == n`` and ``confidence == min(seed + delta * n, cap)``.

Repeated contexts graduate into direct behavior hits: the static
tables are still consulted on every call, but a record's rising
confidence lets it outrank the weaker table signals over time.
"""

from __future__ import annotations

import logging
from datetime import datetime

from wayfinder.behavior.store import BehaviorStore
from wayfinder.core.logging import event_fields
from wayfinder.core.types import BEHAVIOR_CONFIDENCE_CAP, BehaviorRecord, Candidate, bucket_key

log = logging.getLogger(__name__)


class LearningFeedback:
    """
    Hebbian-style strengthening of behavior records.

    Parameters
    ----------
    store : BehaviorStore
        Records to update.
    seed_confidence : float
        Confidence of a newly created record before its first update
        (default 0.5).
    delta : float
        Confidence added per update (default 0.1).
    cap : float
        Confidence ceiling (default 0.95).
    """

    def __init__(
        self,
        store: BehaviorStore,
        seed_confidence: float = 0.5,
        delta: float = 0.1,
        cap: float = BEHAVIOR_CONFIDENCE_CAP,
    ) -> None:
        self.store = store
        self.seed_confidence = seed_confidence
        self.delta = delta
        self.cap = min(cap, BEHAVIOR_CONFIDENCE_CAP)

    def learn(self, query: str, candidate: Candidate, instant: datetime) -> BehaviorRecord:
        """Strengthen the bucket of *instant*; returns the updated record."""
        weekday, hour = bucket_key(instant)

        def seed() -> BehaviorRecord:
            return BehaviorRecord(
                weekday=weekday,
                hour=hour,
                pattern=query.lower(),
                path=candidate.path,
                frequency=0,
                confidence=self.seed_confidence,
            )

        def strengthen(record: BehaviorRecord) -> None:
            record.frequency += 1
            record.confidence = min(record.confidence + self.delta, self.cap)
            record.last_used = instant

        record = self.store.upsert(weekday, hour, seed, strengthen)
        log.debug(
            "Learned %s -> %r (frequency=%d, confidence=%.2f, via %s)",
            record.key,
            record.path,
            record.frequency,
            record.confidence,
            candidate.source,
            extra=event_fields(
                "learned",
                query,
                candidate,
                instant,
                path=record.path,
                confidence=round(record.confidence, 4),
                frequency=record.frequency,
            ),
        )
        return record
