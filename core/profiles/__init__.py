"""Profiles Module - verification workflow, employee codes and the profile list."""
from core.profiles.models import ProfileRecord, ProfileStore, VerificationStatus
from core.profiles.employee_code import EmployeeCodeSequencer, next_code
from core.profiles.verification import ProfileVerificationService, StatusChange, plan_transition
from core.profiles.listing import ProfileListService, ProfilePage

__all__ = [
    'ProfileRecord', 'ProfileStore', 'VerificationStatus',
    'EmployeeCodeSequencer', 'next_code',
    'ProfileVerificationService', 'StatusChange', 'plan_transition',
    'ProfileListService', 'ProfilePage',
]
