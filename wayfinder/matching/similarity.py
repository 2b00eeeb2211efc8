"""
wayfinder.matching.similarity — Query-to-label matching.

Decides whether a free-text query refers to a pattern label.  Checks
run cheapest first and the first success wins:

  1. Case-insensitive containment in either direction.
  2. Containment after normalisation (whitespace and ``_-.`` removed).
  3. Multi-word labels: every word must be contained in the query.
  4. Single-word labels of two or more characters: containment.
  5. Fuzzy fallback on normalised Levenshtein similarity.

Examples:
    matches("work report", "report")              -> True   (1)
    matches("vacation-photos", "vacation photos") -> True   (2)
    matches("photos from the vacation", "vacation photos") -> True (3)
    matches("raport", "report")                   -> True   (5)

Everything here is pure and deterministic.
"""

from __future__ import annotations

import re
from typing import List

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# Separators: dropped by normalisation, split on for multi-word labels
_SEPARATOR_RE = re.compile(r"[\s_\-.]+")

# Minimum similarity for the fuzzy fallback
DEFAULT_THRESHOLD = 0.7

# Single-word labels shorter than this only match through steps 1/2/5
_MIN_WORD_LEN = 2


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def normalize(text: str) -> str:
    """Lower-case *text* and strip whitespace and ``_-.`` characters."""
    return _SEPARATOR_RE.sub("", text.lower())


def split_words(text: str) -> List[str]:
    """Split *text* into lower-cased words on whitespace and ``_-.``."""
    return [w for w in _SEPARATOR_RE.split(text.lower()) if w]


def levenshtein(a: str, b: str) -> int:
    """Compute Levenshtein edit distance between two strings."""
    if len(a) < len(b):
        return levenshtein(b, a)

    if not b:
        return len(a)

    prev_row = list(range(len(b) + 1))
    for i, ca in enumerate(a):
        curr_row = [i + 1]
        for j, cb in enumerate(b):
            insertions = prev_row[j + 1] + 1
            deletions = curr_row[j] + 1
            substitutions = prev_row[j] + (ca != cb)
            curr_row.append(min(insertions, deletions, substitutions))
        prev_row = curr_row

    return prev_row[-1]


def similarity(a: str, b: str) -> float:
    """
    Normalised edit similarity in [0, 1].

    ``(max_len - distance) / max_len``; two empty strings are identical
    (1.0).  Comparison is case-insensitive.
    """
    a = a.lower()
    b = b.lower()
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - levenshtein(a, b)) / max_len


def contains(text: str, pattern: str) -> bool:
    """Containment either way, directly or after normalisation.

    Empty operands never match; the empty string is contained in
    everything and would turn every query into a hit.
    """
    lt = text.strip().lower()
    lp = pattern.strip().lower()
    if not lt or not lp:
        return False
    if lp in lt or lt in lp:
        return True

    nt = normalize(lt)
    np_ = normalize(lp)
    if not nt or not np_:
        return False
    return np_ in nt or nt in np_


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def matches(text: str, pattern: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """
    Return True if the query *text* refers to the label *pattern*.

    Parameters
    ----------
    text : str
        The user's query.
    pattern : str
        A knowledge-table label or a learned query.
    threshold : float
        Minimum ``similarity()`` for the fuzzy fallback (inclusive).
    """
    if not text or not pattern or not text.strip() or not pattern.strip():
        return False

    if contains(text, pattern):
        return True

    words = split_words(pattern)
    if len(words) > 1:
        if all(contains(text, word) for word in words):
            return True
    elif len(words) == 1 and len(words[0]) >= _MIN_WORD_LEN:
        if contains(text, words[0]):
            return True

    return similarity(text.strip(), pattern.strip()) >= threshold
