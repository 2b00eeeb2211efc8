"""wayfinder.matching — Query/label similarity."""

from wayfinder.matching.similarity import (
    DEFAULT_THRESHOLD,
    contains,
    levenshtein,
    matches,
    normalize,
    similarity,
    split_words,
)

__all__ = [
    "DEFAULT_THRESHOLD",
    "contains",
    "levenshtein",
    "matches",
    "normalize",
    "similarity",
    "split_words",
]
