#!/usr/bin/env python3
"""
Profile verification workflow.

States: pending, verified, rejected. Every state may move to every other;
the only guard is that rejecting requires a non-empty reason. Assigning an
employee code is a one-time side effect of reaching "verified", gated on
whether the profile already has a code rather than on the transition edge.
Codes are never removed.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from tenacity import (
    Retrying,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
)

from core.config_loader import ProfilesConfig
from core.errors import EmployeeCodeExhausted, NotFound, SequencingConflict, ValidationError
from core.profiles.employee_code import EmployeeCodeSequencer
from core.profiles.models import ProfileRecord, ProfileStore, VerificationStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusChange:
    """Outcome of a validated status transition."""
    status: VerificationStatus
    rejection_reason: Optional[str]
    assign_code: bool


def plan_transition(
    target: Union[str, VerificationStatus],
    rejection_reason: Optional[str],
    has_code: bool
) -> StatusChange:
    """
    Validate a status change and work out its side effects.

    Raises:
        ValidationError: If the status is unknown, or it is "rejected"
            without a reason.
    """
    try:
        status = VerificationStatus(target)
    except ValueError:
        raise ValidationError(f"Invalid status value: {target}")

    reason = rejection_reason.strip() if rejection_reason else None

    if status is VerificationStatus.REJECTED:
        if not reason:
            raise ValidationError("A rejection reason is required to reject a profile")
        return StatusChange(status=status, rejection_reason=reason, assign_code=False)

    return StatusChange(
        status=status,
        rejection_reason=None,
        assign_code=status is VerificationStatus.VERIFIED and not has_code
    )


class ProfileVerificationService:
    """Applies status changes and allocates employee codes."""

    def __init__(self, store: ProfileStore, config: Optional[ProfilesConfig] = None):
        self.store = store
        self.config = config or ProfilesConfig()
        self.sequencer = EmployeeCodeSequencer(
            prefix=self.config.employee_code_prefix,
            width=self.config.employee_code_width
        )

    def update_status(
        self,
        profile_id: str,
        status: Union[str, VerificationStatus],
        rejection_reason: Optional[str] = None
    ) -> ProfileRecord:
        """
        Move a profile to a new verification status.

        Args:
            profile_id: Profile to update.
            status: Target status.
            rejection_reason: Required when rejecting.

        Returns:
            The updated profile.

        Raises:
            NotFound: If the profile does not exist.
            ValidationError: On an invalid status or a missing rejection reason.
            SequencingConflict: If code allocation keeps conflicting.
        """
        profile = self.store.get_profile(profile_id)
        if profile is None:
            raise NotFound(f"Profile {profile_id} not found")

        change = plan_transition(status, rejection_reason, has_code=bool(profile.employee_id))

        profile = self.store.update_status(profile_id, change.status.value, change.rejection_reason)
        logger.info(f"Profile {profile_id} status set to {change.status.value}")

        if change.assign_code:
            profile = self.allocate_code(profile_id)

        return profile

    def allocate_code(self, profile_id: str) -> ProfileRecord:
        """
        Assign the next employee code, retrying only this step on a conflict.
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.config.code_allocation_attempts),
            retry=(
                retry_if_exception_type(SequencingConflict)
                & retry_if_not_exception_type(EmployeeCodeExhausted)
            ),
            before_sleep=self._log_conflict,
            reraise=True
        )

        for attempt in retrying:
            with attempt:
                existing = self.store.list_employee_codes()

                malformed = self.sequencer.malformed(existing)
                if malformed:
                    logger.warning(f"Ignoring {len(malformed)} malformed employee codes: {malformed[:5]}")

                code = self.sequencer.next_code(existing)
                profile = self.store.assign_employee_code(profile_id, code)

        logger.info(f"Profile {profile_id} has employee code {profile.employee_id}")
        return profile

    @staticmethod
    def _log_conflict(retry_state) -> None:
        logger.warning(
            f"Employee code conflict on attempt {retry_state.attempt_number}, retrying allocation"
        )
