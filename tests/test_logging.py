"""Tests for wayfinder.core.logging."""

import io
import json
import logging
import sys

import pytest

from conftest import TUESDAY_8PM, WEDNESDAY_10AM
from wayfinder import ContextualPredictor
from wayfinder.core.config import Config
from wayfinder.core.logging import StructuredFormatter, configure_logging, event_fields
from wayfinder.core.types import Candidate


@pytest.fixture
def restore_logger():
    """Put the wayfinder logger back the way it was after the test."""
    logger = logging.getLogger("wayfinder")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


@pytest.fixture
def json_lines(restore_logger):
    """Route wayfinder DEBUG output as JSON into a buffer; returns a reader."""
    buffer = io.StringIO()
    configure_logging(structured=True, level="DEBUG", stream=buffer)

    def read():
        return [json.loads(line) for line in buffer.getvalue().splitlines()]

    return read


def _record(msg="hello %s", args=("world",), exc_info=None, **extra):
    record = logging.LogRecord(
        name="wayfinder.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=42,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestEventFields:
    def test_candidate_and_bucket(self):
        best = Candidate(path="/p", confidence=0.95, source="project", weighted_confidence=1.14)
        fields = event_fields("prediction", "build a web app", best, WEDNESDAY_10AM)
        assert fields == {
            "event": "prediction",
            "query": "build a web app",
            "source": "project",
            "path": "/p",
            "confidence": 0.95,
            "weighted_confidence": 1.14,
            "bucket": [3, 10],
        }

    def test_overrides(self):
        best = Candidate(path="/p", confidence=0.9, source="daily")
        fields = event_fields("learned", "x", best, TUESDAY_8PM, confidence=0.6, frequency=1)
        assert fields["confidence"] == 0.6
        assert fields["frequency"] == 1
        assert fields["bucket"] == [2, 20]

    def test_minimal(self):
        assert event_fields("miss") == {"event": "miss"}


class TestStructuredFormatter:
    def test_base_fields(self):
        entry = json.loads(StructuredFormatter().format(_record()))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "wayfinder.test"
        assert entry["msg"] == "hello world"
        assert entry["where"] == "test_logging:42"
        assert entry["ts"].endswith("Z")
        assert "exception" not in entry
        assert "event" not in entry

    def test_event_fields_promoted(self):
        record = _record(event="prediction", source="temporal", bucket=[3, 10], confidence=0.9)
        entry = json.loads(StructuredFormatter().format(record))
        assert entry["event"] == "prediction"
        assert entry["source"] == "temporal"
        assert entry["bucket"] == [3, 10]
        assert entry["confidence"] == 0.9

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())
        entry = json.loads(StructuredFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]


class TestConfigureLogging:
    def test_plain_sets_level_only(self, restore_logger):
        before = list(restore_logger.handlers)
        logger = configure_logging(level="DEBUG")
        assert logger is restore_logger
        assert logger.level == logging.DEBUG
        assert logger.handlers == before

    def test_structured_installs_json_handler(self, restore_logger):
        logger = configure_logging(structured=True, level="warning")
        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[-1].formatter, StructuredFormatter)
        assert logger.propagate is False

    def test_repeat_does_not_stack_handlers(self, restore_logger):
        configure_logging(structured=True)
        configure_logging(structured=True)
        json_handlers = [
            h for h in restore_logger.handlers if isinstance(h.formatter, StructuredFormatter)
        ]
        assert len(json_handlers) == 1

    def test_unknown_level_falls_back_to_info(self, restore_logger):
        assert configure_logging(level="chatty").level == logging.INFO

    def test_engine_enables_structured_logging(self, restore_logger, config):
        cfg = Config(**{**config.to_dict(), "structured_logging": True, "log_level": "DEBUG"})
        ContextualPredictor(config=cfg)
        assert restore_logger.level == logging.DEBUG
        assert isinstance(restore_logger.handlers[-1].formatter, StructuredFormatter)


class TestPredictionEvents:
    def _events(self, lines, event):
        return [e for e in lines() if e.get("event") == event]

    def test_prediction_and_learning(self, json_lines, engine, config):
        engine.predict("build a web app")

        (prediction,) = self._events(json_lines, "prediction")
        assert prediction["query"] == "build a web app"
        assert prediction["source"] == "project"
        assert prediction["path"] == config.project_dir
        assert prediction["confidence"] == 0.95
        assert prediction["weighted_confidence"] == pytest.approx(1.14)
        assert prediction["bucket"] == [3, 10]

        (learned,) = self._events(json_lines, "learned")
        assert learned["frequency"] == 1
        assert learned["confidence"] == pytest.approx(0.6)
        assert learned["path"] == config.project_dir

    def test_miss(self, json_lines, engine):
        engine.predict("zzqx")
        (miss,) = self._events(json_lines, "miss")
        assert miss["query"] == "zzqx"
        assert miss["bucket"] == [3, 10]
        assert "source" not in miss

    def test_learning_failure(self, json_lines, engine, monkeypatch):
        def broken(*args, **kwargs):
            raise OSError("store unavailable")

        monkeypatch.setattr(engine.learner, "learn", broken)
        engine.predict("build a web app")
        (failure,) = self._events(json_lines, "learning_error")
        assert failure["level"] == "WARNING"
        assert failure["source"] == "project"
        assert "OSError: store unavailable" in failure["exception"]
