#!/usr/bin/env python3
"""
Request models for API endpoints.

Bodies use camelCase on the wire, matching the portal client.
"""

from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class StatusUpdateRequest(BaseModel):
    """Request to change a jobseeker profile's verification status."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {"status": "rejected", "rejectionReason": "Work permit expired"}
        }
    )

    status: str = Field(..., description="Target status: pending, verified or rejected")
    rejection_reason: Optional[str] = Field(
        None,
        description="Required when status is rejected"
    )


class AssignCandidateRequest(BaseModel):
    """Request to assign a candidate to a position."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "candidateId": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "startDate": "2026-03-02",
                "endDate": "2026-06-30"
            }
        }
    )

    candidate_id: str = Field(..., min_length=1)
    start_date: date
    end_date: Optional[date] = None
