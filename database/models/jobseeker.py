import uuid

from sqlalchemy import Column, Text, Boolean, TIMESTAMP, UniqueConstraint, Index
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from .base import Base, EMBEDDING_DIMENSIONS


class JobseekerProfile(Base):
    """
    A jobseeker's profile.

    Verified profiles are offered as candidates. employee_id is assigned
    once, on the first transition to verified, and is unique across all
    profiles; the unique constraint is what serializes concurrent
    allocations.
    """
    __tablename__ = 'jobseeker_profiles'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True))

    first_name = Column(Text)
    last_name = Column(Text)
    email = Column(Text, nullable=False, unique=True)
    mobile = Column(Text)

    city = Column(Text)
    province = Column(Text)

    bio = Column(Text)
    experience = Column(Text)  # e.g. "0-6 Months", "1-2 Years"
    availability = Column(Text)  # Full-Time|Part-Time
    weekend_availability = Column(Boolean, nullable=False, default=False)

    verification_status = Column(Text, nullable=False, default='pending')  # pending|verified|rejected
    rejection_reason = Column(Text)
    employee_id = Column(Text)

    # Embedding of the profile text, written by the embedding service
    profile_embedding = Column(Vector(EMBEDDING_DIMENSIONS))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    assignments = relationship("PositionCandidateAssignment", back_populates="candidate", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint('employee_id', name='unique_employee_id'),
        Index('idx_jobseeker_profiles_status', 'verification_status'),
        Index('idx_jobseeker_profiles_created', 'created_at'),
        Index('idx_jobseeker_profiles_experience', 'experience'),
        Index('idx_jobseeker_profiles_embedding_hnsw', 'profile_embedding', postgresql_using='hnsw', postgresql_with={'m': 16, 'ef_construction': 64}, postgresql_ops={'profile_embedding': 'vector_cosine_ops'}),
    )
