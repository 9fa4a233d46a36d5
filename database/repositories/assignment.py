import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from database.models import JobseekerProfile, Position, PositionCandidateAssignment
from database.repositories.base import BaseRepository
from database.repositories.candidate import COMMITTED_STATUSES, parse_uuid

logger = logging.getLogger(__name__)


class AssignmentRepository(BaseRepository):
    def get_position(self, position_id: str, for_update: bool = False) -> Optional[Position]:
        """
        Look up a position.

        With for_update the row stays locked until the transaction ends, so
        concurrent assignments to the same position are serialized.
        """
        pid = parse_uuid(position_id)
        if pid is None:
            return None
        with self.storage_errors("look up position"):
            if not for_update:
                return self.db.get(Position, pid)
            stmt = select(Position).where(Position.id == pid).with_for_update()
            return self.db.execute(stmt).scalars().first()

    def get_profile(self, profile_id: str) -> Optional[JobseekerProfile]:
        pid = parse_uuid(profile_id)
        if pid is None:
            return None
        with self.storage_errors("look up profile"):
            return self.db.get(JobseekerProfile, pid)

    def get_committed_assignments(self, position_id: str) -> List[PositionCandidateAssignment]:
        with self.storage_errors("read position assignments"):
            stmt = select(PositionCandidateAssignment).where(
                PositionCandidateAssignment.position_id == parse_uuid(position_id),
                PositionCandidateAssignment.status.in_(COMMITTED_STATUSES)
            ).order_by(PositionCandidateAssignment.created_at.asc())
            return list(self.db.execute(stmt).scalars().all())

    def list_assignments(self, position_id: str) -> List[PositionCandidateAssignment]:
        """All assignments on a position, oldest first, with the jobseeker profile loaded."""
        with self.storage_errors("read position assignments"):
            stmt = select(PositionCandidateAssignment).options(
                joinedload(PositionCandidateAssignment.candidate)
            ).where(
                PositionCandidateAssignment.position_id == parse_uuid(position_id)
            ).order_by(PositionCandidateAssignment.created_at.asc())
            return list(self.db.execute(stmt).scalars().all())

    def get_assigned_candidate_ids(self, position_id: str) -> List[str]:
        return [str(a.candidate_id) for a in self.get_committed_assignments(position_id)]

    def find_committed_assignment(
        self,
        position_id: str,
        candidate_id: str
    ) -> Optional[PositionCandidateAssignment]:
        with self.storage_errors("read position assignment"):
            stmt = select(PositionCandidateAssignment).where(
                PositionCandidateAssignment.position_id == parse_uuid(position_id),
                PositionCandidateAssignment.candidate_id == parse_uuid(candidate_id),
                PositionCandidateAssignment.status.in_(COMMITTED_STATUSES)
            )
            return self.db.execute(stmt).scalars().first()

    def create_assignment(
        self,
        position_id: str,
        candidate_id: str,
        start_date: date,
        end_date: Optional[date]
    ) -> PositionCandidateAssignment:
        status = 'upcoming' if start_date > date.today() else 'active'
        assignment = PositionCandidateAssignment(
            position_id=parse_uuid(position_id),
            candidate_id=parse_uuid(candidate_id),
            start_date=start_date,
            end_date=end_date,
            status=status
        )
        with self.storage_errors("create assignment"):
            self.db.add(assignment)
            self.db.flush()
        logger.info(f"Assigned candidate {candidate_id} to position {position_id} ({status})")
        return assignment

    def cancel_assignment(self, assignment: PositionCandidateAssignment) -> None:
        with self.storage_errors("cancel assignment"):
            assignment.status = 'cancelled'
            self.db.flush()
        logger.info(f"Cancelled assignment {assignment.id}")
