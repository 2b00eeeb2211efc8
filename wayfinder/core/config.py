"""
wayfinder.core.config — Configuration for the wayfinder prediction engine.

Supports loading from YAML, environment variables, and programmatic
construction.  Directory defaults follow the host platform so the
built-in knowledge tables resolve to sensible locations without any
configuration at all.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from wayfinder.core.types import TYPE_WEIGHTS


def _is_windows() -> bool:
    return sys.platform == "win32"


def _default_home_dir() -> str:
    if _is_windows():
        return os.path.join("C:\\Users", os.environ.get("USERNAME") or "user")
    return os.environ.get("HOME") or "/home/user"


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@dataclass
class Config:
    """
    Central configuration object.

    Construct directly, via ``Config.from_yaml(path)``, or via
    ``Config.from_env()``.
    """

    # -- directories --------------------------------------------------------
    home_dir: str = field(default_factory=_default_home_dir)
    project_dir: str = ""  # "" = platform default (see __post_init__)
    games_dir: str = ""  # "" = platform default

    # -- knowledge tables ---------------------------------------------------
    knowledge_path: Optional[str] = None  # YAML tables; None = built-in

    # -- matching & ranking -------------------------------------------------
    fuzzy_threshold: float = 0.7
    type_weights: Dict[str, float] = field(default_factory=lambda: dict(TYPE_WEIGHTS))

    # -- behavior learning --------------------------------------------------
    seed_confidence: float = 0.5  # confidence of a freshly created record
    learn_delta: float = 0.1  # added on every accepted prediction
    confidence_cap: float = 0.95
    auto_learn: bool = True  # learn from every prediction that is returned

    # -- logging ------------------------------------------------------------
    structured_logging: bool = False  # emit JSON log lines when True
    log_level: str = "INFO"

    # -----------------------------------------------------------------------
    # Derived paths
    # -----------------------------------------------------------------------

    @property
    def documents_dir(self) -> str:
        return os.path.join(self.home_dir, "Documents")

    @property
    def downloads_dir(self) -> str:
        return os.path.join(self.home_dir, "Downloads")

    @property
    def desktop_dir(self) -> str:
        return os.path.join(self.home_dir, "Desktop")

    @property
    def pictures_dir(self) -> str:
        return os.path.join(self.home_dir, "Pictures")

    @property
    def music_dir(self) -> str:
        return os.path.join(self.home_dir, "Music")

    @property
    def videos_dir(self) -> str:
        return os.path.join(self.home_dir, "Videos")

    # -----------------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------------

    def __post_init__(self) -> None:
        self.home_dir = str(self.home_dir)
        if not self.project_dir:
            self.project_dir = (
                "D:\\my_app" if _is_windows() else os.path.join(self.home_dir, "my_app")
            )
        if not self.games_dir:
            self.games_dir = (
                "C:\\Program Files\\" if _is_windows() else os.path.join(self.home_dir, "Games")
            )
        merged = dict(TYPE_WEIGHTS)
        merged.update(self.type_weights or {})
        self.type_weights = merged
        self.validate()

    def validate(self) -> None:
        """Reject settings the engine cannot work with."""
        if not 0.0 < self.fuzzy_threshold <= 1.0:
            raise ValueError(f"fuzzy_threshold must be in (0, 1], got {self.fuzzy_threshold!r}")
        unknown = set(self.type_weights) - set(TYPE_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown type_weights keys: {sorted(unknown)}")
        for name, weight in self.type_weights.items():
            if weight < 0:
                raise ValueError(f"type weight for {name!r} must be >= 0, got {weight!r}")
        if not 0.0 <= self.confidence_cap <= 0.95:
            raise ValueError(f"confidence_cap must be in [0, 0.95], got {self.confidence_cap!r}")
        if not 0.0 <= self.seed_confidence <= self.confidence_cap:
            raise ValueError(
                f"seed_confidence must be in [0, confidence_cap], got {self.seed_confidence!r}"
            )
        if self.learn_delta < 0:
            raise ValueError(f"learn_delta must be >= 0, got {self.learn_delta!r}")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file.

        Any key in the YAML that matches a Config field is applied.
        Unknown keys are silently ignored so the file can carry
        application-level settings alongside wayfinder config.
        """
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as fh:
            raw: Dict[str, Any] = yaml.safe_load(fh) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        # pull the wayfinder section if nested, else use top-level
        data = raw.get("wayfinder") or raw
        if not isinstance(data, dict):
            raise ValueError(f"Section 'wayfinder' in {path} must be a mapping")

        # a relative knowledge file is resolved against the config file
        knowledge = data.get("knowledge_path")
        if knowledge and not Path(knowledge).is_absolute():
            data["knowledge_path"] = str(path.parent / knowledge)

        known = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in known}

        return cls(**filtered)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, **overrides: Any) -> "Config":
        """Build a Config from ``WAYFINDER_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        for name in ("home_dir", "project_dir", "games_dir", "knowledge_path", "log_level"):
            raw = env.get(f"WAYFINDER_{name.upper()}")
            if raw:
                values[name] = raw
        for name in ("fuzzy_threshold", "seed_confidence", "learn_delta", "confidence_cap"):
            raw = env.get(f"WAYFINDER_{name.upper()}")
            if raw:
                values[name] = float(raw)
        for name in ("auto_learn", "structured_logging"):
            raw = env.get(f"WAYFINDER_{name.upper()}")
            if raw:
                values[name] = raw.strip().lower() in ("1", "true", "yes", "on")

        values.update(overrides)
        return cls(**values)

    # -----------------------------------------------------------------------
    # Serialisation
    # -----------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to a plain dict (YAML/JSON-safe)."""
        return {
            "home_dir": self.home_dir,
            "project_dir": self.project_dir,
            "games_dir": self.games_dir,
            "knowledge_path": self.knowledge_path,
            "fuzzy_threshold": self.fuzzy_threshold,
            "type_weights": dict(self.type_weights),
            "seed_confidence": self.seed_confidence,
            "learn_delta": self.learn_delta,
            "confidence_cap": self.confidence_cap,
            "auto_learn": self.auto_learn,
            "structured_logging": self.structured_logging,
            "log_level": self.log_level,
        }
