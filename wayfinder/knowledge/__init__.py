"""wayfinder.knowledge — Static time, day, season and project tables."""

from wayfinder.knowledge.defaults import default_knowledge
from wayfinder.knowledge.tables import (
    KnowledgeBase,
    KnowledgeTable,
    ProjectTable,
    load_knowledge,
)

__all__ = [
    "KnowledgeBase",
    "KnowledgeTable",
    "ProjectTable",
    "default_knowledge",
    "load_knowledge",
]
