import logging
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from core.errors import NotFound, SequencingConflict
from core.matching.filters import Predicate
from core.profiles.models import ProfileRecord, ProfileStore
from database.models import JobseekerProfile
from database.repositories.base import BaseRepository
from database.repositories.candidate import parse_uuid

logger = logging.getLogger(__name__)


def to_profile_record(profile: JobseekerProfile) -> ProfileRecord:
    return ProfileRecord(
        id=str(profile.id),
        email=profile.email,
        first_name=profile.first_name,
        last_name=profile.last_name,
        mobile=profile.mobile,
        city=profile.city,
        province=profile.province,
        experience=profile.experience,
        verification_status=profile.verification_status,
        rejection_reason=profile.rejection_reason,
        employee_id=profile.employee_id,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


class ProfileRepository(BaseRepository, ProfileStore):
    def get_profile(self, profile_id: str) -> Optional[ProfileRecord]:
        profile = self._get(profile_id)
        return to_profile_record(profile) if profile else None

    def count_profiles(self) -> int:
        with self.storage_errors("count jobseeker profiles"):
            stmt = select(func.count()).select_from(JobseekerProfile)
            return self.db.execute(stmt).scalar_one()

    def list_profiles(self, storage_predicate: Predicate, cap: int) -> List[ProfileRecord]:
        columns = {
            'verification_status': JobseekerProfile.verification_status,
            'created_at': JobseekerProfile.created_at,
            'city': JobseekerProfile.city,
            'province': JobseekerProfile.province,
            'experience': JobseekerProfile.experience,
        }

        with self.storage_errors("list jobseeker profiles"):
            stmt = select(JobseekerProfile)
            for clause in self.rule_clauses(storage_predicate.rules, columns):
                stmt = stmt.where(clause)
            stmt = stmt.order_by(
                JobseekerProfile.created_at.desc(), JobseekerProfile.id.desc()
            ).limit(cap)
            profiles = self.db.execute(stmt).scalars().all()

        return [to_profile_record(p) for p in profiles]

    def update_status(
        self,
        profile_id: str,
        status: str,
        rejection_reason: Optional[str]
    ) -> ProfileRecord:
        profile = self._get(profile_id)
        if profile is None:
            raise NotFound(f"Profile {profile_id} not found")

        with self.storage_errors("update profile status"):
            profile.verification_status = status
            profile.rejection_reason = rejection_reason
            self.db.flush()

        return to_profile_record(profile)

    def list_employee_codes(self) -> List[str]:
        with self.storage_errors("read employee codes"):
            stmt = select(JobseekerProfile.employee_id).where(JobseekerProfile.employee_id.is_not(None))
            return list(self.db.execute(stmt).scalars().all())

    def assign_employee_code(self, profile_id: str, code: str) -> ProfileRecord:
        pid = parse_uuid(profile_id)

        with self.storage_errors("assign employee code"):
            try:
                # Savepoint: a conflict rolls back only the allocation
                with self.db.begin_nested():
                    self.db.execute(
                        update(JobseekerProfile)
                        .where(JobseekerProfile.id == pid, JobseekerProfile.employee_id.is_(None))
                        .values(employee_id=code)
                        .execution_options(synchronize_session=False)
                    )
            except IntegrityError as e:
                logger.warning(f"Employee code {code} already taken: {e.orig}")
                raise SequencingConflict(f"Employee code {code} already assigned to another profile") from e

        profile = self._get(profile_id)
        if profile is None:
            raise NotFound(f"Profile {profile_id} not found")

        with self.storage_errors("reload profile"):
            self.db.refresh(profile)

        return to_profile_record(profile)

    def _get(self, profile_id: str) -> Optional[JobseekerProfile]:
        pid = parse_uuid(profile_id)
        if pid is None:
            return None
        with self.storage_errors("look up profile"):
            return self.db.get(JobseekerProfile, pid)
