"""
wayfinder.core.types — Data types for the wayfinder prediction engine.

Every structure here is a plain dataclass: no ORM, no magic,
serialisable to dict/JSON in one call.  Knowledge-table records are
frozen; behavior records are the only mutable type and are owned by
``BehaviorStore``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

log = logging.getLogger("wayfinder.types")


# ---------------------------------------------------------------------------
# Source types
# ---------------------------------------------------------------------------

#: Candidate provenance, in predictor invocation order.
SOURCE_TYPES: Tuple[str, ...] = (
    "temporal",  # time-of-day profile
    "daily",  # weekday / weekend profile
    "seasonal",  # month / season profile
    "project",  # project keyword profile
    "behavior",  # learned (weekday, hour) record
)

#: Ranking weights applied during fusion.
TYPE_WEIGHTS: Dict[str, float] = {
    "project": 1.2,
    "temporal": 1.1,
    "behavior": 1.0,
    "daily": 0.9,
    "seasonal": 0.8,
}

#: Upper bound for learned behavior confidence.
BEHAVIOR_CONFIDENCE_CAP = 0.95

#: Bucket domains for each knowledge-table kind.
BUCKET_DOMAINS: Dict[str, range] = {
    "hour": range(0, 24),
    "weekday": range(0, 7),  # 0 = Sunday
    "month": range(1, 13),
}

BucketKey = Tuple[int, int]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def weekday_of(instant: datetime) -> int:
    """Day of week with Sunday = 0 and Saturday = 6."""
    return instant.isoweekday() % 7


def bucket_key(instant: datetime) -> BucketKey:
    """``(weekday, hour)`` key used by the behavior store."""
    return (weekday_of(instant), instant.hour)


def _check_confidence(value: float, what: str) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{what} confidence must be in [0, 1], got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Knowledge-table records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PatternEntry:
    """A named intent bucket resolving to a path."""

    label: str
    path: str

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "path": self.path}


@dataclass(frozen=True)
class BucketProfile:
    """
    Temporal, day or seasonal profile.

    ``members`` holds hours (0-23), weekdays (0-6, Sunday = 0) or months
    (1-12); which one depends on the table the profile is placed in.
    Patterns are kept in definition order since the first matching
    label wins.
    """

    name: str
    members: FrozenSet[int]
    patterns: Tuple[PatternEntry, ...]
    confidence: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", frozenset(int(m) for m in self.members))
        object.__setattr__(self, "patterns", tuple(self.patterns))
        object.__setattr__(
            self, "confidence", _check_confidence(self.confidence, f"profile {self.name!r}")
        )

    def is_active(self, bucket: int) -> bool:
        return bucket in self.members

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "members": sorted(self.members),
            "confidence": self.confidence,
            "patterns": [p.to_dict() for p in self.patterns],
        }


@dataclass(frozen=True)
class ProjectProfile:
    """Project type recognised by keyword; keywords are stored lower-cased."""

    name: str
    keywords: Tuple[str, ...]
    path: str
    confidence: float
    related_files: Tuple[str, ...] = ()  # marker files, descriptive only

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "keywords", tuple(k.lower() for k in self.keywords if k and k.strip())
        )
        object.__setattr__(self, "related_files", tuple(self.related_files))
        object.__setattr__(
            self, "confidence", _check_confidence(self.confidence, f"project {self.name!r}")
        )

    def first_keyword_in(self, text: str) -> Optional[str]:
        """Return the first keyword contained in *text* (case-insensitive)."""
        lowered = text.lower()
        for keyword in self.keywords:
            if keyword in lowered:
                return keyword
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "keywords": list(self.keywords),
            "path": self.path,
            "confidence": self.confidence,
            "related_files": list(self.related_files),
        }


# ---------------------------------------------------------------------------
# BehaviorRecord — learned usage for one (weekday, hour) bucket
# ---------------------------------------------------------------------------


@dataclass
class BehaviorRecord:
    """
    Learned association for a single ``(weekday, hour)`` bucket.

    ``pattern`` is the lower-cased query that first created the record;
    later queries are matched against it.  ``frequency`` only grows and
    ``confidence`` never exceeds ``BEHAVIOR_CONFIDENCE_CAP``.
    """

    weekday: int
    hour: int
    pattern: str
    path: str
    frequency: int = 0
    confidence: float = 0.5
    last_used: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.weekday not in BUCKET_DOMAINS["weekday"]:
            raise ValueError(f"weekday must be 0-6, got {self.weekday!r}")
        if self.hour not in BUCKET_DOMAINS["hour"]:
            raise ValueError(f"hour must be 0-23, got {self.hour!r}")
        self.frequency = max(0, int(self.frequency))
        self.confidence = max(0.0, min(BEHAVIOR_CONFIDENCE_CAP, float(self.confidence)))

    @property
    def key(self) -> BucketKey:
        return (self.weekday, self.hour)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekday": self.weekday,
            "hour": self.hour,
            "pattern": self.pattern,
            "path": self.path,
            "frequency": self.frequency,
            "confidence": round(self.confidence, 4),
            "last_used": self.last_used.isoformat() if self.last_used else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BehaviorRecord":
        last_used = d.get("last_used")
        if isinstance(last_used, str):
            last_used = datetime.fromisoformat(last_used)
        return cls(
            weekday=int(d["weekday"]),
            hour=int(d["hour"]),
            pattern=str(d["pattern"]),
            path=str(d["path"]),
            frequency=d.get("frequency", 0),
            confidence=d.get("confidence", 0.5),
            last_used=last_used,
        )


# ---------------------------------------------------------------------------
# Candidate — one predictor's proposal
# ---------------------------------------------------------------------------


@dataclass
class Candidate:
    """A proposed path with its confidence and provenance.

    ``reason`` is diagnostic text only.  ``weighted_confidence`` is
    filled in by fusion and is used for ranking, never returned to the
    caller as the answer.
    """

    path: str
    confidence: float
    source: str
    reason: str = ""
    weighted_confidence: float = 0.0

    def __post_init__(self) -> None:
        if self.source not in SOURCE_TYPES:
            raise ValueError(
                f"Invalid candidate source {self.source!r}; "
                f"expected one of {list(SOURCE_TYPES)}"
            )
        self.confidence = max(0.0, min(1.0, float(self.confidence)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "confidence": round(self.confidence, 4),
            "weighted_confidence": round(self.weighted_confidence, 4),
            "source": self.source,
            "reason": self.reason,
        }


# ---------------------------------------------------------------------------
# PredictionContext — optional caller hints
# ---------------------------------------------------------------------------


@dataclass
class PredictionContext:
    """Optional hints a caller may pass alongside the query."""

    urgency: str = ""
    project_hints: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "PredictionContext":
        if not d:
            return cls()
        hints = d.get("project_hints", d.get("projectHints")) or []
        if isinstance(hints, str):
            hints = [hints]
        elif not isinstance(hints, (list, tuple)):
            log.debug("Ignoring project hints of type %s", type(hints).__name__)
            hints = []
        return cls(
            urgency=str(d.get("urgency") or ""),
            project_hints=[str(h) for h in hints if h],
        )

    @classmethod
    def coerce(cls, value: Any) -> "PredictionContext":
        """Accept a PredictionContext, a dict, or None."""
        if isinstance(value, cls):
            return value
        if value is None or isinstance(value, dict):
            return cls.from_dict(value)
        raise TypeError(f"context must be a dict or PredictionContext, got {type(value).__name__}")
