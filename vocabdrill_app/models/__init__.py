"""Database models package for vocabdrill."""

from ..db_instance import db

from .user import User
from .vocabulary import Semester, VocabWord
from .progress import StudySessionState, StudyStats, UserProgress

__all__ = [
    'db',
    'User',
    'Semester',
    'VocabWord',
    'UserProgress',
    'StudyStats',
    'StudySessionState',
]
