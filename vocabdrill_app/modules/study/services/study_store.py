"""
Study Store - the persistence collaborator of the study loop.

The drill code only sees ``StudyStore``. ``SqlStudyStore`` backs it with the
progress and vocabulary services. Failures never propagate into the study
loop: reads return empty results, writes return False, both are logged.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from vocabdrill_app.core.error_handlers import VocabDrillError
from vocabdrill_app.extensions import db
from vocabdrill_app.models import Semester, User, UserProgress, VocabWord
from vocabdrill_app.modules.auth.services.auth_service import AuthService
from vocabdrill_app.modules.progress.schemas import ProgressUpdate
from vocabdrill_app.modules.progress.services.progress_service import ProgressService
from vocabdrill_app.modules.vocabulary.services.vocabulary_service import VocabularyService

logger = logging.getLogger(__name__)


class StudyStore(ABC):

    @abstractmethod
    def get_semesters(self) -> List[Semester]:
        ...

    @abstractmethod
    def get_words(self, semester_id: int) -> List[VocabWord]:
        ...

    @abstractmethod
    def get_progress(self, user_id: int, semester_ids: Sequence[int]) -> List[UserProgress]:
        ...

    @abstractmethod
    def save_progress(self, user_id: int, updates: Sequence[Dict[str, Any]]) -> bool:
        """Upsert by (user, word). Returns False when the write failed."""

    @abstractmethod
    def record_stat(self, user_id: int, semester_id: int, date: str, kind: str) -> bool:
        """Increment the (user, semester, date) counter of ``kind``."""

    @abstractmethod
    def login(self, username: str, password: Optional[str] = None) -> Tuple[User, bool]:
        ...


class SqlStudyStore(StudyStore):
    """SQLAlchemy implementation used by the web app."""

    def get_semesters(self) -> List[Semester]:
        try:
            return VocabularyService.get_semesters()
        except SQLAlchemyError as exc:
            logger.warning("Failed to load semesters: %s", exc)
            db.session.rollback()
            return []

    def get_words(self, semester_id: int) -> List[VocabWord]:
        try:
            return VocabularyService.get_words(semester_id)
        except SQLAlchemyError as exc:
            logger.warning("Failed to load words of semester %s: %s", semester_id, exc)
            db.session.rollback()
            return []

    def get_progress(self, user_id: int, semester_ids: Sequence[int]) -> List[UserProgress]:
        if not semester_ids:
            return []
        try:
            return ProgressService.get_progress(user_id, semester_ids)
        except SQLAlchemyError as exc:
            logger.warning("Failed to load progress of user %s: %s", user_id, exc)
            db.session.rollback()
            return []

    def save_progress(self, user_id: int, updates: Sequence[Dict[str, Any]]) -> bool:
        if not updates:
            return True
        try:
            parsed = [ProgressUpdate.model_validate(u) for u in updates]
            ProgressService.save_progress(user_id, parsed)
            return True
        except (SQLAlchemyError, ValueError) as exc:
            # pydantic.ValidationError is a ValueError
            logger.error("Dropping %s progress updates of user %s: %s", len(updates), user_id, exc)
            db.session.rollback()
            return False

    def record_stat(self, user_id: int, semester_id: int, date: str, kind: str) -> bool:
        try:
            ProgressService.record_stat(user_id, semester_id, date, kind)
            return True
        except (SQLAlchemyError, ValueError) as exc:
            logger.error("Failed to record %s stat for user %s: %s", kind, user_id, exc)
            db.session.rollback()
            return False

    def login(self, username: str, password: Optional[str] = None) -> Tuple[User, bool]:
        # Validation errors are for the caller to show, so they propagate.
        try:
            return AuthService.login_or_register(username, password)
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise VocabDrillError('Login failed', code='STORE_ERROR', status_code=503) from exc
