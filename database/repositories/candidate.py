import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import exists, func, null, select

from core.matching.filters import Predicate
from core.matching.models import (
    Candidate, STATUS_ASSIGNED, STATUS_AVAILABLE, STATUS_UNAVAILABLE
)
from core.matching.retriever import CandidateStore
from database.models import JobseekerProfile, Position, PositionCandidateAssignment
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

# Assignment statuses that commit a candidate
COMMITTED_STATUSES = ('active', 'upcoming')


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    try:
        return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


def similarity_from_distance(distance: Optional[float]) -> float:
    """Convert pgvector cosine distance to a similarity clipped to [0, 1].

    Candidates without an embedding (distance is None) score 0.0.
    """
    if distance is None:
        return 0.0
    similarity = 1.0 - float(distance)
    if not (0.0 <= similarity <= 1.0):
        logger.debug(f"Similarity out of range: {similarity}, clipping to [0, 1]")
        return max(0.0, min(1.0, similarity))
    return similarity


class CandidateRepository(BaseRepository, CandidateStore):
    """Candidate retrieval over jobseeker_profiles, scored with pgvector."""

    def position_exists(self, position_id: str) -> bool:
        pid = parse_uuid(position_id)
        if pid is None:
            return False
        with self.storage_errors("look up position"):
            stmt = select(Position.id).where(Position.id == pid)
            return self.db.execute(stmt).first() is not None

    def count_candidates(self, position_id: str) -> int:
        with self.storage_errors("count candidates"):
            stmt = select(func.count()).select_from(JobseekerProfile).where(
                JobseekerProfile.verification_status == 'verified'
            )
            return self.db.execute(stmt).scalar_one()

    def fetch_candidates(
        self,
        position_id: str,
        storage_predicate: Predicate,
        cap: int
    ) -> List[Candidate]:
        pid = parse_uuid(position_id)

        with self.storage_errors("fetch position candidates"):
            embedding = self.db.execute(
                select(Position.requirements_embedding).where(Position.id == pid)
            ).scalar_one_or_none()

            committed_elsewhere = exists().where(
                PositionCandidateAssignment.candidate_id == JobseekerProfile.id,
                PositionCandidateAssignment.position_id != pid,
                PositionCandidateAssignment.status.in_(COMMITTED_STATUSES)
            )
            assigned_here = exists().where(
                PositionCandidateAssignment.candidate_id == JobseekerProfile.id,
                PositionCandidateAssignment.position_id == pid,
                PositionCandidateAssignment.status.in_(COMMITTED_STATUSES)
            )
            is_available = ~committed_elsewhere

            if embedding is not None:
                distance = JobseekerProfile.profile_embedding.cosine_distance(embedding)
            else:
                distance = null()

            stmt = select(
                JobseekerProfile,
                distance.label('distance'),
                is_available.label('is_available'),
                assigned_here.label('assigned_here')
            )

            columns = self._filter_columns(is_available)
            for clause in self.rule_clauses(storage_predicate.rules, columns):
                stmt = stmt.where(clause)

            # Deterministic storage order: best first, then oldest profile
            if embedding is not None:
                stmt = stmt.order_by(distance.asc().nulls_last())
            stmt = stmt.order_by(JobseekerProfile.created_at.asc(), JobseekerProfile.id.asc()).limit(cap)

            rows = self.db.execute(stmt).all()

        return [self._to_candidate(row) for row in rows]

    def _filter_columns(self, is_available) -> Dict[str, Any]:
        return {
            'experience': JobseekerProfile.experience,
            'availability': JobseekerProfile.availability,
            'weekend_availability': JobseekerProfile.weekend_availability,
            'city': JobseekerProfile.city,
            'province': JobseekerProfile.province,
            'verification_status': JobseekerProfile.verification_status,
            'is_available': is_available,
        }

    def _to_candidate(self, row) -> Candidate:
        profile = row[0]
        mapping = row._mapping
        is_available = bool(mapping['is_available'])

        if mapping['assigned_here']:
            status = STATUS_ASSIGNED
        elif is_available:
            status = STATUS_AVAILABLE
        else:
            status = STATUS_UNAVAILABLE

        return Candidate(
            id=str(profile.id),
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone_number=profile.mobile,
            bio=profile.bio,
            experience=profile.experience,
            availability=profile.availability,
            weekend_availability=bool(profile.weekend_availability),
            city=profile.city,
            province=profile.province,
            similarity_score=similarity_from_distance(mapping['distance']),
            is_available=is_available,
            status=status,
            verification_status=profile.verification_status,
        )
