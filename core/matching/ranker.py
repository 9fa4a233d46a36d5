"""
Ranking and in-process refinement of retrieved candidates.
"""

from typing import Iterable, List

from core.matching.filters import Predicate
from core.matching.models import Candidate, RankedResult


def refine(candidates: Iterable[Candidate], in_process_predicate: Predicate) -> List[Candidate]:
    """Keep candidates satisfying every in-process rule, preserving order."""
    if in_process_predicate.is_noop:
        return list(candidates)
    return [c for c in candidates if in_process_predicate(c)]


def rank(candidates: Iterable[Candidate]) -> List[RankedResult]:
    """
    Order candidates by similarity score, highest first.

    sorted() is stable, so candidates with equal scores keep their input
    order and identical calls always produce identical output.
    """
    ordered = sorted(candidates, key=lambda c: c.sort_score, reverse=True)
    return [RankedResult(candidate=c, rank=i) for i, c in enumerate(ordered, start=1)]
