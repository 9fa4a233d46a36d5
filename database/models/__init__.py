from .base import Base, EMBEDDING_DIMENSIONS
from .position import Position, PositionCandidateAssignment
from .jobseeker import JobseekerProfile

__all__ = [
    'Base',
    'EMBEDDING_DIMENSIONS',
    'Position',
    'PositionCandidateAssignment',
    'JobseekerProfile',
]
