"""
wayfinder.signal.fusion — Weighted ranking of predictor candidates.

    weighted_confidence = confidence * weight[source]

Default weights: project 1.2, temporal 1.1, behavior 1.0, daily 0.9,
seasonal 0.8.  Ranking is a stable sort on weighted confidence, so
candidates that tie keep the order in which predictors produced them.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from wayfinder.core.types import TYPE_WEIGHTS, Candidate


def rank(
    candidates: Iterable[Candidate],
    weights: Optional[Dict[str, float]] = None,
) -> List[Candidate]:
    """Weight every candidate and return them best first.

    Sets ``weighted_confidence`` on each candidate in place.  A source
    missing from *weights* is weighted 1.0.
    """
    table = TYPE_WEIGHTS if weights is None else weights
    ranked = list(candidates)
    for candidate in ranked:
        candidate.weighted_confidence = candidate.confidence * table.get(candidate.source, 1.0)
    ranked.sort(key=lambda c: c.weighted_confidence, reverse=True)
    return ranked


def select_best(
    candidates: Iterable[Candidate],
    weights: Optional[Dict[str, float]] = None,
) -> Optional[Candidate]:
    """Highest weighted candidate, or None when there are none."""
    ranked = rank(candidates, weights)
    return ranked[0] if ranked else None
