"""
wayfinder.knowledge.defaults — Built-in knowledge tables.

Profiles are plain data, built once per engine from the configured
directories.  Order matters everywhere: active profiles are scanned in
definition order and the first matching label (or project keyword)
wins.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from wayfinder.core.config import Config
from wayfinder.core.types import BucketProfile, PatternEntry, ProjectProfile
from wayfinder.knowledge.tables import KnowledgeBase, KnowledgeTable, ProjectTable


def _profile(
    name: str,
    members: Tuple[int, ...],
    confidence: float,
    patterns: List[Tuple[str, str]],
) -> BucketProfile:
    return BucketProfile(
        name=name,
        members=frozenset(members),
        patterns=tuple(PatternEntry(label, path) for label, path in patterns),
        confidence=confidence,
    )


def _dirs(config: Config) -> Dict[str, str]:
    return {
        "project": config.project_dir,
        "games": config.games_dir,
        "documents": config.documents_dir,
        "downloads": config.downloads_dir,
        "desktop": config.desktop_dir,
        "pictures": config.pictures_dir,
        "music": config.music_dir,
        "videos": config.videos_dir,
    }


# -------------------------------------------------------------------
# Time of day
# -------------------------------------------------------------------


def temporal_table(config: Config) -> KnowledgeTable:
    d = _dirs(config)
    return KnowledgeTable(
        "hour",
        [
            # personal time
            _profile(
                "dawn",
                (0, 1, 2, 3, 4, 5),
                0.7,
                [
                    ("personal project", d["project"]),
                    ("hobby", d["documents"]),
                    ("music listening", d["music"]),
                    ("video watching", d["videos"]),
                    ("games", d["games"]),
                ],
            ),
            # getting started
            _profile(
                "morning",
                (6, 7, 8),
                0.8,
                [
                    ("work prep", d["documents"]),
                    ("email attachment", d["downloads"]),
                    ("schedule check", d["desktop"]),
                    ("news", d["downloads"]),
                    ("morning routine", d["pictures"]),
                ],
            ),
            # focused work
            _profile(
                "forenoon",
                (9, 10, 11),
                0.9,
                [
                    ("development work", d["project"]),
                    ("document writing", d["documents"]),
                    ("project", d["project"]),
                    ("meeting materials", d["documents"]),
                    ("work mail", d["downloads"]),
                ],
            ),
            _profile(
                "afternoon",
                (12, 13, 14, 15, 16, 17),
                0.85,
                [
                    ("collaboration", d["project"]),
                    ("review", d["documents"]),
                    ("meeting notes", d["documents"]),
                    ("image editing", d["pictures"]),
                    ("video editing", d["videos"]),
                ],
            ),
            # wrap-up and personal
            _profile(
                "evening",
                (18, 19, 20, 21),
                0.75,
                [
                    ("self study", d["documents"]),
                    ("hobby activity", d["pictures"]),
                    ("entertainment", d["videos"]),
                    ("photo organizing", d["pictures"]),
                    ("music", d["music"]),
                ],
            ),
            _profile(
                "night",
                (22, 23),
                0.7,
                [
                    ("personal project", d["project"]),
                    ("reading", d["documents"]),
                    ("movie", d["videos"]),
                    ("music listening", d["music"]),
                    ("photo viewing", d["pictures"]),
                ],
            ),
        ],
    )


# -------------------------------------------------------------------
# Day of week (Sunday = 0)
# -------------------------------------------------------------------


def daily_table(config: Config) -> KnowledgeTable:
    d = _dirs(config)
    return KnowledgeTable(
        "weekday",
        [
            _profile(
                "weekday",
                (1, 2, 3, 4, 5),
                0.9,
                [
                    ("work", d["documents"]),
                    ("project", d["project"]),
                    ("development", d["project"]),
                    ("meeting", d["documents"]),
                    ("report", d["documents"]),
                ],
            ),
            _profile(
                "weekend",
                (0, 6),
                0.8,
                [
                    ("hobby", d["pictures"]),
                    ("games", d["games"]),
                    ("movie", d["videos"]),
                    ("music", d["music"]),
                    ("personal project", d["project"]),
                ],
            ),
        ],
    )


# -------------------------------------------------------------------
# Seasons (months)
# -------------------------------------------------------------------


def seasonal_table(config: Config) -> KnowledgeTable:
    d = _dirs(config)
    return KnowledgeTable(
        "month",
        [
            _profile(
                "spring",
                (3, 4, 5),
                0.6,
                [
                    ("flower photos", d["pictures"]),
                    ("outdoor activity", d["pictures"]),
                    ("new semester", d["documents"]),
                    ("spring cleaning", d["downloads"]),
                    ("new project", d["project"]),
                ],
            ),
            _profile(
                "summer",
                (6, 7, 8),
                0.7,
                [
                    ("vacation photos", d["pictures"]),
                    ("travel videos", d["videos"]),
                    ("summer music", d["music"]),
                    ("vacation plan", d["documents"]),
                    ("games", d["games"]),
                ],
            ),
            _profile(
                "autumn",
                (9, 10, 11),
                0.65,
                [
                    ("autumn photos", d["pictures"]),
                    ("semester project", d["project"]),
                    ("cleanup", d["documents"]),
                    ("year end prep", d["documents"]),
                    ("backup", d["downloads"]),
                ],
            ),
            _profile(
                "winter",
                (12, 1, 2),
                0.6,
                [
                    ("indoor activity", d["videos"]),
                    ("year end review", d["documents"]),
                    ("new year plan", d["documents"]),
                    ("indoor project", d["project"]),
                    ("reading", d["documents"]),
                ],
            ),
        ],
    )


# -------------------------------------------------------------------
# Project types
# -------------------------------------------------------------------


def project_table(config: Config) -> ProjectTable:
    d = _dirs(config)
    return ProjectTable(
        [
            ProjectProfile(
                name="web_development",
                keywords=(
                    "react", "vue", "angular", "html", "css",
                    "javascript", "typescript", "node", "web",
                ),
                path=d["project"],
                confidence=0.95,
                related_files=("package.json", "webpack.config.js", "tsconfig.json"),
            ),
            ProjectProfile(
                name="mobile_development",
                keywords=("android", "ios", "flutter", "react-native", "kotlin", "swift"),
                path=d["project"],
                confidence=0.95,
                related_files=("android/build.gradle", "ios/Podfile", "pubspec.yaml"),
            ),
            ProjectProfile(
                name="data_analysis",
                keywords=("python", "jupyter", "pandas", "numpy", "matplotlib", "data", "analysis"),
                path=d["documents"],
                confidence=0.9,
                related_files=(".ipynb", "requirements.txt", "data.csv"),
            ),
            ProjectProfile(
                name="design",
                keywords=("design", "ui", "ux", "figma", "sketch", "photoshop", "illustrator"),
                path=d["pictures"],
                confidence=0.85,
                related_files=(".psd", ".ai", ".sketch", ".fig"),
            ),
            ProjectProfile(
                name="video_editing",
                keywords=("premiere", "after effects", "davinci", "video", "editing", "motion"),
                path=d["videos"],
                confidence=0.9,
                related_files=(".prproj", ".aep", ".drp"),
            ),
            ProjectProfile(
                name="documentation",
                keywords=("report", "document", "paper", "thesis", "manual", "guide"),
                path=d["documents"],
                confidence=0.8,
                related_files=(".docx", ".pdf", ".md"),
            ),
        ]
    )


def default_knowledge(config: Config) -> KnowledgeBase:
    """Build the built-in tables for *config*'s directories."""
    return KnowledgeBase(
        temporal=temporal_table(config),
        daily=daily_table(config),
        seasonal=seasonal_table(config),
        projects=project_table(config),
    )
