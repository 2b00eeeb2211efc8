"""Tests for wayfinder.signal.learning — behavior reinforcement."""

from datetime import timedelta

import pytest

from conftest import TUESDAY_8PM, WEDNESDAY_10AM
from wayfinder.core.types import Candidate
from wayfinder.signal.learning import LearningFeedback


def _cand(path="/docs", source="daily"):
    return Candidate(path=path, confidence=0.9, source=source)


class TestLearningFeedback:
    def test_first_learn_seeds_record(self, store):
        record = LearningFeedback(store).learn("Weekly Meeting", _cand(), TUESDAY_8PM)
        assert record.key == (2, 20)
        assert record.pattern == "weekly meeting"
        assert record.path == "/docs"
        assert record.frequency == 1
        assert record.confidence == pytest.approx(0.6)
        assert record.last_used == TUESDAY_8PM

    @pytest.mark.parametrize("n", [1, 2, 4, 5, 12])
    def test_monotonic_growth(self, store, n):
        learner = LearningFeedback(store)
        for _ in range(n):
            learner.learn("meeting", _cand(), TUESDAY_8PM)
        record = store.get(2, 20)
        assert record.frequency == n
        assert record.confidence == pytest.approx(min(0.5 + 0.1 * n, 0.95))
        assert record.confidence <= 0.95

    def test_existing_record_keeps_pattern_and_path(self, store):
        learner = LearningFeedback(store)
        learner.learn("meeting", _cand("/docs"), TUESDAY_8PM)
        later = TUESDAY_8PM + timedelta(minutes=30)
        record = learner.learn("something else", _cand("/videos", "project"), later)
        assert record.pattern == "meeting"
        assert record.path == "/docs"
        assert record.frequency == 2
        assert record.last_used == later

    def test_learns_from_any_source(self, store):
        learner = LearningFeedback(store)
        for source in ("temporal", "seasonal", "project", "behavior"):
            learner.learn("meeting", _cand(source=source), TUESDAY_8PM)
        assert store.get(2, 20).frequency == 4

    def test_buckets_are_independent(self, store):
        learner = LearningFeedback(store)
        learner.learn("meeting", _cand(), TUESDAY_8PM)
        learner.learn("development work", _cand("/work"), WEDNESDAY_10AM)
        assert len(store) == 2
        assert store.get(3, 10).path == "/work"
        assert store.get(2, 20).frequency == 1

    def test_custom_rates(self, store):
        learner = LearningFeedback(store, seed_confidence=0.2, delta=0.25, cap=0.6)
        confidences = [learner.learn("x", _cand(), TUESDAY_8PM).confidence for _ in range(3)]
        assert confidences == pytest.approx([0.45, 0.6, 0.6])

    def test_cap_never_exceeds_global_limit(self, store):
        learner = LearningFeedback(store, cap=1.0)
        for _ in range(10):
            learner.learn("x", _cand(), TUESDAY_8PM)
        assert store.get(2, 20).confidence == pytest.approx(0.95)
