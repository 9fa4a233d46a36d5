from database.repositories.base import BaseRepository
from database.repositories.candidate import CandidateRepository
from database.repositories.profile import ProfileRepository
from database.repositories.assignment import AssignmentRepository

__all__ = [
    'BaseRepository',
    'CandidateRepository',
    'ProfileRepository',
    'AssignmentRepository',
]
