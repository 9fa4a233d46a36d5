"""Business logic services."""

from .candidate_service import CandidateService
from .profile_service import ProfileService
from .assignment_service import AssignmentService
