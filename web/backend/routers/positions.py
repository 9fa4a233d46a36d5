#!/usr/bin/env python3
"""
Position assignment endpoints.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..services.assignment_service import AssignmentService
from ..models.requests import AssignCandidateRequest
from ..models.responses import AssignmentResponse, PositionAssignmentsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/positions", tags=["positions"])


@router.post("/{position_id}/assign", response_model=AssignmentResponse)
def assign_candidate(
    position_id: str,
    body: AssignCandidateRequest,
    db: Session = Depends(get_db)
):
    """Assign a verified candidate to a position with free capacity."""
    return AssignmentService(db).assign(position_id, body)


@router.delete("/{position_id}/assign/{candidate_id}", response_model=AssignmentResponse)
def remove_candidate(
    position_id: str,
    candidate_id: str,
    db: Session = Depends(get_db)
):
    """Cancel a candidate's assignment on a position."""
    return AssignmentService(db).remove(position_id, candidate_id)


@router.get("/{position_id}/assignments", response_model=PositionAssignmentsResponse)
def list_position_assignments(
    position_id: str,
    db: Session = Depends(get_db)
):
    """List a position's assignments with the assigned jobseeker's contact details."""
    return AssignmentService(db).list_assignments(position_id)
