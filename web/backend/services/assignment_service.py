#!/usr/bin/env python3
"""
Assignment service - place candidates on positions and remove them.
"""

import logging
from sqlalchemy.orm import Session

from core.errors import AssignmentException, NotFound
from database.models import PositionCandidateAssignment
from database.repositories import AssignmentRepository
from ..models.requests import AssignCandidateRequest
from ..models.responses import (
    AssignedJobseeker,
    AssignmentResponse,
    AssignmentSummary,
    PositionAssignment,
    PositionAssignmentsResponse,
)
from ..utils import safe_datetime_iso

logger = logging.getLogger(__name__)


class AssignmentService:
    """Service for position assignments."""

    def __init__(self, db: Session):
        self.repository = AssignmentRepository(db)

    def assign(self, position_id: str, request: AssignCandidateRequest) -> AssignmentResponse:
        """
        Assign a candidate to a position.

        Raises:
            NotFound: If the position or candidate does not exist.
            AssignmentException: If the dates are inverted, the candidate is
                not verified or already assigned, or the position is full.
        """
        # Locks the position row until commit so capacity checks do not race
        position = self.repository.get_position(position_id, for_update=True)
        if position is None:
            raise NotFound(f"Position {position_id} not found")

        profile = self.repository.get_profile(request.candidate_id)
        if profile is None:
            raise NotFound(f"Candidate {request.candidate_id} not found")

        if request.end_date is not None and request.end_date < request.start_date:
            raise AssignmentException("End date must not be before start date")

        if profile.verification_status != 'verified':
            raise AssignmentException("Only verified jobseekers can be assigned to positions")

        if self.repository.find_committed_assignment(position_id, request.candidate_id):
            raise AssignmentException("Candidate is already assigned to this position")

        capacity = position.number_of_positions or 1
        filled = len(self.repository.get_committed_assignments(position_id))
        if filled >= capacity:
            raise AssignmentException(f"Position is full ({filled} of {capacity} filled)")

        try:
            assignment = self.repository.create_assignment(
                position_id, request.candidate_id, request.start_date, request.end_date
            )
            assigned = self.repository.get_assigned_candidate_ids(position_id)
            with self.repository.storage_errors("save assignment"):
                self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise

        return AssignmentResponse(
            message="Candidate assigned to position",
            assignment=self._to_summary(assignment),
            assigned_jobseekers=assigned
        )

    def remove(self, position_id: str, candidate_id: str) -> AssignmentResponse:
        """
        Cancel a candidate's active or upcoming assignment on a position.

        Raises:
            NotFound: If there is no such assignment.
        """
        assignment = self.repository.find_committed_assignment(position_id, candidate_id)
        if assignment is None:
            raise NotFound(f"No active assignment for candidate {candidate_id} on position {position_id}")

        try:
            self.repository.cancel_assignment(assignment)
            assigned = self.repository.get_assigned_candidate_ids(position_id)
            with self.repository.storage_errors("save assignment"):
                self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise

        return AssignmentResponse(
            message="Candidate removed from position",
            assignment=self._to_summary(assignment),
            assigned_jobseekers=assigned
        )

    def list_assignments(self, position_id: str) -> PositionAssignmentsResponse:
        """
        List every assignment on a position, cancelled ones included.

        Raises:
            NotFound: If the position does not exist.
        """
        if self.repository.get_position(position_id) is None:
            raise NotFound(f"Position {position_id} not found")

        assignments = self.repository.list_assignments(position_id)
        return PositionAssignmentsResponse(
            position_id=position_id,
            assignments=[self._to_position_assignment(a) for a in assignments]
        )

    def _to_summary(self, assignment: PositionCandidateAssignment) -> AssignmentSummary:
        return AssignmentSummary(
            id=str(assignment.id),
            position_id=str(assignment.position_id),
            candidate_id=str(assignment.candidate_id),
            start_date=safe_datetime_iso(assignment.start_date),
            end_date=safe_datetime_iso(assignment.end_date),
            status=assignment.status
        )

    def _to_position_assignment(self, assignment: PositionCandidateAssignment) -> PositionAssignment:
        profile = assignment.candidate
        jobseeker = None
        if profile is not None:
            jobseeker = AssignedJobseeker(
                id=str(profile.id),
                employee_id=profile.employee_id,
                first_name=profile.first_name,
                last_name=profile.last_name,
                email=profile.email,
                mobile=profile.mobile
            )

        return PositionAssignment(
            **self._to_summary(assignment).model_dump(),
            created_at=safe_datetime_iso(assignment.created_at),
            updated_at=safe_datetime_iso(assignment.updated_at),
            jobseeker_profile=jobseeker
        )
