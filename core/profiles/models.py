"""Profile data structures and the storage contract for the profile workflow."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from core.matching.filters import Predicate
from core.matching.models import display_name


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ProfileRecord:
    """Detached view of a jobseeker profile."""
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    mobile: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    experience: Optional[str] = None
    verification_status: str = VerificationStatus.PENDING.value
    rejection_reason: Optional[str] = None
    employee_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def name(self) -> str:
        return display_name(self.first_name, self.last_name)


class ProfileStore(ABC):
    """Storage contract for the profile list and verification workflow."""

    @abstractmethod
    def get_profile(self, profile_id: str) -> Optional[ProfileRecord]:
        ...

    @abstractmethod
    def count_profiles(self) -> int:
        ...

    @abstractmethod
    def list_profiles(self, storage_predicate: Predicate, cap: int) -> List[ProfileRecord]:
        """Profiles satisfying the storage rules, newest first."""
        ...

    @abstractmethod
    def update_status(
        self,
        profile_id: str,
        status: str,
        rejection_reason: Optional[str]
    ) -> ProfileRecord:
        ...

    @abstractmethod
    def list_employee_codes(self) -> List[str]:
        ...

    @abstractmethod
    def assign_employee_code(self, profile_id: str, code: str) -> ProfileRecord:
        """
        Set the profile's code if it has none.

        Returns the profile unchanged when a code is already present.

        Raises:
            SequencingConflict: If another profile already holds `code`.
        """
        ...
