import uuid

from sqlalchemy import Column, Text, Integer, Date, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from .base import Base, EMBEDDING_DIMENSIONS


class Position(Base):
    """
    An open job requisition that candidates are matched against.
    """
    __tablename__ = 'positions'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    client_name = Column(Text)
    position_code = Column(Text, unique=True)

    city = Column(Text)
    province = Column(Text)
    experience = Column(Text)
    employment_type = Column(Text)  # Full-Time|Part-Time
    description = Column(Text)

    # Number of slots that can be filled by assignments
    number_of_positions = Column(Integer, nullable=False, default=1)

    # Embedding of the position requirements, written by the embedding service
    requirements_embedding = Column(Vector(EMBEDDING_DIMENSIONS))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    assignments = relationship("PositionCandidateAssignment", back_populates="position", cascade="all, delete-orphan")


class PositionCandidateAssignment(Base):
    """
    A jobseeker placed on a position for a date range.

    Assignments with status active or upcoming commit the candidate; a
    committed candidate is reported as unavailable for other positions.
    """
    __tablename__ = 'position_candidate_assignments'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    position_id = Column(UUID(as_uuid=True), ForeignKey('positions.id', ondelete='CASCADE'), nullable=False)
    candidate_id = Column(UUID(as_uuid=True), ForeignKey('jobseeker_profiles.id', ondelete='CASCADE'), nullable=False)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    status = Column(Text, nullable=False, default='active')  # active|upcoming|completed|cancelled

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    position = relationship("Position", back_populates="assignments")
    candidate = relationship("JobseekerProfile", back_populates="assignments")

    __table_args__ = (
        Index('idx_pca_position_status', 'position_id', 'status'),
        Index('idx_pca_candidate_status', 'candidate_id', 'status'),
    )
