"""
wayfinder.core.logging — JSON log lines for prediction events.

Prediction, miss, learning and failure events attach their outcome to
the log record through ``extra=`` (build it with ``event_fields``).
``StructuredFormatter`` lifts those attributes into top-level JSON keys,
so a log pipeline can filter on ``source`` or chart
``weighted_confidence`` without parsing message text::

    {"ts": "2026-10-14T10:00:00.123Z", "level": "DEBUG",
     "logger": "wayfinder.predictor", "where": "predictor:201",
     "msg": "Predicted 'build a web app' -> '/home/u/my_app'",
     "event": "prediction", "query": "build a web app",
     "source": "project", "path": "/home/u/my_app",
     "confidence": 0.95, "weighted_confidence": 1.14, "bucket": [3, 10]}

With ``structured=False`` only the level is applied and records keep
flowing to whatever handlers the application installed.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime
from typing import IO, Any, Dict, Optional

from wayfinder.core.types import Candidate, bucket_key

#: Record attributes promoted to JSON keys, in output order.
EVENT_FIELDS = (
    "event",
    "query",
    "source",
    "path",
    "confidence",
    "weighted_confidence",
    "bucket",
    "frequency",
)


def event_fields(
    event: str,
    query: Optional[str] = None,
    candidate: Optional[Candidate] = None,
    instant: Optional[datetime] = None,
    **more: Any,
) -> Dict[str, Any]:
    """Build the ``extra=`` mapping for a prediction-event log call.

    *more* overrides anything derived from *candidate*, e.g. the
    confidence of a learned record rather than the winning candidate.
    """
    fields: Dict[str, Any] = {"event": event}
    if query is not None:
        fields["query"] = query
    if candidate is not None:
        fields["source"] = candidate.source
        fields["path"] = candidate.path
        fields["confidence"] = round(candidate.confidence, 4)
        fields["weighted_confidence"] = round(candidate.weighted_confidence, 4)
    if instant is not None:
        fields["bucket"] = list(bucket_key(instant))
    fields.update(more)
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with prediction-event fields on top.

    Base keys are ``ts`` (UTC, millisecond precision), ``level``,
    ``logger``, ``where`` (``module:line``) and ``msg``.  Any of
    ``EVENT_FIELDS`` present on the record follow, then ``exception``
    when a traceback is attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        stamp = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        entry: Dict[str, Any] = {
            "ts": f"{stamp}.{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "where": f"{record.module}:{record.lineno}",
            "msg": record.getMessage(),
        }
        for name in EVENT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(
    structured: bool = False,
    level: str = "INFO",
    logger_name: str = "wayfinder",
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Set the wayfinder log level and, optionally, JSON output.

    Parameters
    ----------
    structured:
        Install a ``StructuredFormatter`` handler writing to *stream*
        (stderr by default).  Calling again replaces that handler
        rather than adding a second one.
    level:
        Level name; unknown names fall back to INFO.
    logger_name:
        Logger to configure (default ``"wayfinder"``).
    stream:
        Destination for JSON lines.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if structured:
        for handler in list(logger.handlers):
            if isinstance(handler.formatter, StructuredFormatter):
                logger.removeHandler(handler)

        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        # JSON lines only; the application's own handlers would print twice
        logger.propagate = False

    return logger
