#!/usr/bin/env python3
"""
Response models for API endpoints.

Serialized with camelCase aliases (FastAPI dumps response models by alias).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Dict, Any


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CandidateSummary(CamelModel):
    """A ranked candidate for a position."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
                "phoneNumber": "416-555-0100",
                "bio": "Forklift certified, five years in warehousing",
                "experience": "3-5",
                "weekendAvailability": True,
                "availability": "Full-Time",
                "city": "Toronto",
                "province": "ON",
                "similarityScore": 0.8731,
                "isAvailable": True,
                "status": "available",
                "rank": 1
            }
        }
    )

    id: str
    name: str
    email: str
    phone_number: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[str] = None
    weekend_availability: bool = False
    availability: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    similarity_score: float = Field(ge=0, le=1)
    is_available: bool
    status: str
    rank: int = Field(ge=1)


class PaginationInfo(CamelModel):
    """Pagination metadata; page math uses total_filtered."""
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total: int = Field(ge=0, description="Count before any filter")
    total_filtered: int = Field(ge=0, description="Count after all filters")
    total_pages: int = Field(ge=0)
    has_next_page: bool
    has_prev_page: bool


class PositionCandidatesResponse(CamelModel):
    """Response for the position candidates endpoint."""
    success: bool = True
    candidates: List[CandidateSummary]
    pagination: PaginationInfo
    position_id: str
    filters: Dict[str, Any] = Field(default_factory=dict)


class ProfileSummary(CamelModel):
    """A jobseeker profile in the directory list."""
    id: str
    name: str
    email: str
    mobile: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    experience: Optional[str] = None
    verification_status: str
    rejection_reason: Optional[str] = None
    employee_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProfilesResponse(CamelModel):
    """Response for the jobseeker profile list."""
    success: bool = True
    profiles: List[ProfileSummary]
    pagination: PaginationInfo
    filters: Dict[str, Any] = Field(default_factory=dict)


class ProfileStatusResponse(CamelModel):
    """Response for a verification status change."""
    success: bool = True
    message: str
    profile: ProfileSummary


class AssignmentSummary(CamelModel):
    id: str
    position_id: str
    candidate_id: str
    start_date: str
    end_date: Optional[str] = None
    status: str


class AssignmentResponse(CamelModel):
    """Response for assigning or removing a candidate."""
    success: bool = True
    message: str
    assignment: AssignmentSummary
    assigned_jobseekers: List[str] = Field(default_factory=list)


class AssignedJobseeker(CamelModel):
    id: str
    employee_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    mobile: Optional[str] = None


class PositionAssignment(AssignmentSummary):
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    jobseeker_profile: Optional[AssignedJobseeker] = None


class PositionAssignmentsResponse(CamelModel):
    """Response for listing a position's assignments."""
    success: bool = True
    position_id: str
    assignments: List[PositionAssignment]
