#!/usr/bin/env python3
"""
Candidate service - ranked candidates for a position.
"""

import logging
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from core.config_loader import MatchingConfig
from core.matching import CandidateMatchingService, FilterSpec, RankedResult
from database.repositories import CandidateRepository
from ..models.responses import CandidateSummary, PositionCandidatesResponse
from ..utils import display_score, to_pagination_info

logger = logging.getLogger(__name__)


class CandidateService:
    """Service for the position candidates endpoint."""

    def __init__(self, db: Session, config: Optional[MatchingConfig] = None):
        self.db = db
        self.matching = CandidateMatchingService(CandidateRepository(db), config=config)

    def get_position_candidates(
        self,
        position_id: str,
        filters: Dict[str, Any]
    ) -> PositionCandidatesResponse:
        """
        Get one page of ranked candidates for a position.

        Args:
            position_id: Position to match against.
            filters: Raw request filters keyed by FilterSpec attribute name.

        Returns:
            Response with the candidate page, pagination and applied filters.

        Raises:
            ValidationError: If the filters are malformed.
            NotFound: If the position does not exist.
            RetrievalError: On a storage fault.
        """
        spec = FilterSpec.build(**filters)
        page = self.matching.match(position_id, spec)

        if page.truncated:
            logger.warning(f"Candidates for position {position_id} may be incomplete (fetch cap reached)")

        return PositionCandidatesResponse(
            candidates=[self._to_summary(result) for result in page.candidates],
            pagination=to_pagination_info(page.pagination),
            position_id=page.position_id,
            filters=page.filters
        )

    def _to_summary(self, result: RankedResult) -> CandidateSummary:
        candidate = result.candidate
        return CandidateSummary(
            id=candidate.id,
            name=candidate.name,
            email=candidate.email,
            phone_number=candidate.phone_number,
            bio=candidate.bio,
            experience=candidate.experience,
            weekend_availability=candidate.weekend_availability,
            availability=candidate.availability,
            city=candidate.city,
            province=candidate.province,
            similarity_score=display_score(candidate.similarity_score),
            is_available=candidate.is_available,
            status=candidate.status,
            rank=result.rank
        )
