#!/usr/bin/env python3
"""
Profile service - jobseeker directory and verification status changes.
"""

import logging
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from core.config_loader import MatchingConfig, ProfilesConfig
from core.matching import ProfileFilterSpec
from core.profiles import ProfileListService, ProfileRecord, ProfileVerificationService
from database.repositories import ProfileRepository
from ..models.responses import ProfileStatusResponse, ProfileSummary, ProfilesResponse
from ..utils import safe_datetime_iso, to_pagination_info

logger = logging.getLogger(__name__)


def to_profile_summary(profile: ProfileRecord) -> ProfileSummary:
    return ProfileSummary(
        id=profile.id,
        name=profile.name,
        email=profile.email,
        mobile=profile.mobile,
        city=profile.city,
        province=profile.province,
        experience=profile.experience,
        verification_status=profile.verification_status,
        rejection_reason=profile.rejection_reason,
        employee_id=profile.employee_id,
        created_at=safe_datetime_iso(profile.created_at),
        updated_at=safe_datetime_iso(profile.updated_at)
    )


class ProfileService:
    """Service for jobseeker profile operations."""

    def __init__(
        self,
        db: Session,
        matching_config: Optional[MatchingConfig] = None,
        profiles_config: Optional[ProfilesConfig] = None
    ):
        self.repository = ProfileRepository(db)
        self.listing = ProfileListService(self.repository, config=matching_config)
        self.verification = ProfileVerificationService(self.repository, config=profiles_config)

    def list_profiles(self, filters: Dict[str, Any]) -> ProfilesResponse:
        spec = ProfileFilterSpec.build(**filters)
        page = self.listing.list_profiles(spec)

        return ProfilesResponse(
            profiles=[to_profile_summary(p) for p in page.profiles],
            pagination=to_pagination_info(page.pagination),
            filters=page.filters
        )

    def update_status(
        self,
        profile_id: str,
        status: str,
        rejection_reason: Optional[str] = None
    ) -> ProfileStatusResponse:
        """
        Change a profile's verification status and commit.

        Verifying a profile without an employee code allocates one in the
        same transaction; any failure rolls the whole change back.
        """
        try:
            profile = self.verification.update_status(profile_id, status, rejection_reason)
            with self.repository.storage_errors("save profile status"):
                self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise

        return ProfileStatusResponse(
            message=f"Profile status updated to {profile.verification_status}",
            profile=to_profile_summary(profile)
        )
