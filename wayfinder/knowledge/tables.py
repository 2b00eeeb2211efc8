"""
wayfinder.knowledge.tables — Read-only profile tables.

A ``KnowledgeTable`` holds bucket profiles of one kind (hours,
weekdays or months) and answers which of them are active for an
instant.  ``ProjectTable`` holds keyword profiles.  ``KnowledgeBase``
bundles the four tables the predictors consume.

Tables can also be loaded from YAML::

    temporal:
      - name: forenoon
        members: [9, 10, 11]
        confidence: 0.9
        patterns:
          - {label: development work, path: ~/my_app}
    daily: [...]
    seasonal: [...]
    projects:
      - name: web_development
        keywords: [react, vue, web]
        path: ~/my_app
        confidence: 0.95
        related_files: [package.json]

Sections left out of the file fall back to the built-in defaults.
A leading ``~`` in a path expands to the configured home directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Tuple

import yaml

from wayfinder.core.types import (
    BUCKET_DOMAINS,
    BucketProfile,
    PatternEntry,
    ProjectProfile,
    weekday_of,
)

if TYPE_CHECKING:
    from wayfinder.core.config import Config

log = logging.getLogger("wayfinder.knowledge")


# ---------------------------------------------------------------------------
# KnowledgeTable
# ---------------------------------------------------------------------------


class KnowledgeTable:
    """
    Immutable, ordered collection of bucket profiles of a single kind.

    Parameters
    ----------
    kind : str
        ``"hour"``, ``"weekday"`` (Sunday = 0) or ``"month"``.
    profiles : iterable of BucketProfile
        Profiles in definition order.  Members outside the kind's
        domain are rejected.
    """

    def __init__(self, kind: str, profiles: Iterable[BucketProfile]) -> None:
        if kind not in BUCKET_DOMAINS:
            raise ValueError(
                f"Unknown table kind {kind!r}; expected one of {sorted(BUCKET_DOMAINS)}"
            )
        self._kind = kind
        self._profiles: Tuple[BucketProfile, ...] = tuple(profiles)

        domain = BUCKET_DOMAINS[kind]
        for profile in self._profiles:
            bad = sorted(m for m in profile.members if m not in domain)
            if bad:
                raise ValueError(
                    f"Profile {profile.name!r} has {kind} members outside "
                    f"{domain.start}-{domain.stop - 1}: {bad}"
                )

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def profiles(self) -> Tuple[BucketProfile, ...]:
        return self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[BucketProfile]:
        return iter(self._profiles)

    def bucket_of(self, instant: datetime) -> int:
        """The hour, weekday or month of *instant*, per this table's kind."""
        if self._kind == "hour":
            return instant.hour
        if self._kind == "weekday":
            return weekday_of(instant)
        return instant.month

    def profiles_active_at(self, instant: datetime) -> List[BucketProfile]:
        """Profiles whose members contain the instant's bucket, in order."""
        bucket = self.bucket_of(instant)
        return [p for p in self._profiles if p.is_active(bucket)]

    def uncovered(self) -> List[int]:
        """Buckets of the domain no profile covers."""
        covered = set()
        for profile in self._profiles:
            covered |= profile.members
        return [b for b in BUCKET_DOMAINS[self._kind] if b not in covered]

    def to_list(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self._profiles]


# ---------------------------------------------------------------------------
# ProjectTable
# ---------------------------------------------------------------------------


class ProjectTable:
    """Immutable, ordered collection of project profiles.

    Order is significant: the first profile with a matching keyword wins.
    """

    def __init__(self, profiles: Iterable[ProjectProfile]) -> None:
        self._profiles: Tuple[ProjectProfile, ...] = tuple(profiles)

    @property
    def profiles(self) -> Tuple[ProjectProfile, ...]:
        return self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[ProjectProfile]:
        return iter(self._profiles)

    def to_list(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self._profiles]


# ---------------------------------------------------------------------------
# KnowledgeBase
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KnowledgeBase:
    """The four tables consumed by the signal predictors."""

    temporal: KnowledgeTable
    daily: KnowledgeTable
    seasonal: KnowledgeTable
    projects: ProjectTable

    def __post_init__(self) -> None:
        expected = {"temporal": "hour", "daily": "weekday", "seasonal": "month"}
        for attr, kind in expected.items():
            table = getattr(self, attr)
            if table.kind != kind:
                raise ValueError(f"{attr} table must be of kind {kind!r}, got {table.kind!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "temporal": self.temporal.to_list(),
            "daily": self.daily.to_list(),
            "seasonal": self.seasonal.to_list(),
            "projects": self.projects.to_list(),
        }


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------


def _expand(path: str, home_dir: str) -> str:
    path = str(path)
    if path == "~":
        return home_dir
    if path.startswith("~/") or path.startswith("~\\"):
        return os.path.join(home_dir, path[2:])
    return path


def _bucket_profiles(rows: Any, section: str, home_dir: str) -> List[BucketProfile]:
    if not isinstance(rows, list):
        raise ValueError(f"Section {section!r} must be a list of profiles")
    profiles = []
    for row in rows:
        if not isinstance(row, dict):
            raise ValueError(f"Section {section!r} contains a non-mapping entry: {row!r}")
        try:
            patterns = [
                PatternEntry(label=str(p["label"]), path=_expand(p["path"], home_dir))
                for p in row.get("patterns") or []
            ]
            profiles.append(
                BucketProfile(
                    name=str(row["name"]),
                    members=frozenset(int(m) for m in row["members"]),
                    patterns=tuple(patterns),
                    confidence=row["confidence"],
                )
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Invalid profile in {section!r}: {row!r} ({exc})") from exc
    return profiles


def _project_profiles(rows: Any, home_dir: str) -> List[ProjectProfile]:
    if not isinstance(rows, list):
        raise ValueError("Section 'projects' must be a list of profiles")
    profiles = []
    for row in rows:
        if not isinstance(row, dict):
            raise ValueError(f"Section 'projects' contains a non-mapping entry: {row!r}")
        try:
            profiles.append(
                ProjectProfile(
                    name=str(row["name"]),
                    keywords=tuple(str(k) for k in row["keywords"]),
                    path=_expand(row["path"], home_dir),
                    confidence=row["confidence"],
                    related_files=tuple(str(f) for f in row.get("related_files") or []),
                )
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Invalid project profile: {row!r} ({exc})") from exc
    return profiles


def load_knowledge(path: str | Path, config: "Config") -> KnowledgeBase:
    """Load knowledge tables from a YAML file.

    Missing sections fall back to the built-in tables for *config*.
    Raises ``FileNotFoundError`` for a missing file and ``ValueError``
    for malformed content.
    """
    from wayfinder.knowledge.defaults import default_knowledge

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Knowledge file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Malformed knowledge file {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Knowledge file {path} must contain a mapping")

    defaults = default_knowledge(config)
    home = config.home_dir

    temporal = defaults.temporal
    if "temporal" in raw:
        temporal = KnowledgeTable("hour", _bucket_profiles(raw["temporal"], "temporal", home))
    daily = defaults.daily
    if "daily" in raw:
        daily = KnowledgeTable("weekday", _bucket_profiles(raw["daily"], "daily", home))
    seasonal = defaults.seasonal
    if "seasonal" in raw:
        seasonal = KnowledgeTable("month", _bucket_profiles(raw["seasonal"], "seasonal", home))
    projects = defaults.projects
    if "projects" in raw:
        projects = ProjectTable(_project_profiles(raw["projects"], home))

    knowledge = KnowledgeBase(temporal=temporal, daily=daily, seasonal=seasonal, projects=projects)
    for table in (knowledge.temporal, knowledge.daily, knowledge.seasonal):
        gaps = table.uncovered()
        if gaps:
            log.info("Knowledge table %s leaves buckets uncovered: %s", table.kind, gaps)
    log.debug("Loaded knowledge tables from %s", path)
    return knowledge
