#!/usr/bin/env python3
"""
Candidate Matching Service - ranks jobseekers against an open position.

Pipeline:
    FilterSpec -> PredicateCompiler (storage / in-process split)
               -> CandidateRetriever (one capped fetch + unfiltered total)
               -> refine + rank (in-process rules, similarity order)
               -> paginate (page slice + metadata on the filtered count)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.config_loader import MatchingConfig
from core.matching.filters import FilterSpec, PredicateCompiler, candidate_compiler
from core.matching.models import PaginationState, RankedResult
from core.matching.paginator import paginate
from core.matching.ranker import rank, refine
from core.matching.retriever import CandidateRetriever, CandidateStore

logger = logging.getLogger(__name__)


@dataclass
class CandidatePage:
    """One page of ranked candidates for a position."""
    position_id: str
    candidates: List[RankedResult]
    pagination: PaginationState
    filters: Dict[str, Any] = field(default_factory=dict)
    truncated: bool = False


class CandidateMatchingService:
    """Runs the matching pipeline for one request at a time; holds no request state."""

    def __init__(
        self,
        store: CandidateStore,
        config: Optional[MatchingConfig] = None,
        compiler: Optional[PredicateCompiler] = None
    ):
        self.config = config or MatchingConfig()
        self.retriever = CandidateRetriever(store)
        self.compiler = compiler or candidate_compiler(self.config.filters)

    def match(self, position_id: str, spec: FilterSpec) -> CandidatePage:
        """
        Get one page of candidates for a position.

        Args:
            position_id: Position to match against.
            spec: Validated request filters.

        Returns:
            CandidatePage. When the filters match nothing the page is empty
            with total_filtered = 0.

        Raises:
            NotFound: If the position does not exist.
            RetrievalError: On a storage fault.
        """
        compiled = self.compiler.compile(spec)
        cap = self.config.fetch_cap

        logger.debug(
            f"Matching position {position_id}: "
            f"{len(compiled.storage.rules)} storage rules, "
            f"{len(compiled.in_process.rules)} in-process rules"
        )

        # count() checks the position exists
        total = self.retriever.count(position_id)
        fetched = self.retriever.fetch(position_id, compiled.storage, cap, check_position=False)

        ranked = rank(refine(fetched, compiled.in_process))

        if total < len(ranked):
            # Profiles created between the count and the fetch
            logger.debug(f"Unfiltered total {total} behind fetched count {len(ranked)} for position {position_id}")
            total = len(ranked)

        page_items, pagination = paginate(ranked, spec.page, spec.limit, total=total)

        return CandidatePage(
            position_id=position_id,
            candidates=page_items,
            pagination=pagination,
            filters=compiled.applied,
            truncated=len(fetched) >= cap
        )
