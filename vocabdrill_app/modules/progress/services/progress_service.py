"""
Progress Service - persistence of per-word progress and daily study stats.

Upserts are keyed by (user, word) for progress and (user, semester, date)
for stats.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from vocabdrill_app.extensions import db
from vocabdrill_app.models import StudyStats, UserProgress
from ..schemas import ProgressUpdate

logger = logging.getLogger(__name__)


class ProgressService:
    """Service for UserProgress and StudyStats rows."""

    @staticmethod
    def get_progress(user_id: int, semester_ids: Optional[Sequence[int]] = None) -> List[UserProgress]:
        query = UserProgress.query.filter_by(user_id=user_id)
        if semester_ids:
            query = query.filter(UserProgress.semester_id.in_(list(semester_ids)))
        return query.all()

    @staticmethod
    def save_progress(user_id: int, updates: Iterable[ProgressUpdate], commit: bool = True) -> int:
        """
        Upsert progress rows. The last update for a word in the batch wins.

        ``failure_count`` is never lowered below the stored value.

        Returns:
            Number of rows written
        """
        latest: Dict[int, ProgressUpdate] = {}
        for update in updates:
            latest[update.word_id] = update
        if not latest:
            return 0

        existing = {
            row.word_id: row
            for row in UserProgress.query.filter(
                UserProgress.user_id == user_id,
                UserProgress.word_id.in_(list(latest.keys())),
            ).all()
        }

        for word_id, update in latest.items():
            row = existing.get(word_id)
            if row is None:
                row = UserProgress(user_id=user_id, word_id=word_id, failure_count=0)
                db.session.add(row)
            row.semester_id = update.semester_id
            row.state = update.state
            row.next_review = update.next_review
            row.ef = update.ef
            row.interval = update.interval
            row.failure_count = max(row.failure_count or 0, update.failure_count)
            row.penalty_progress = update.penalty_progress
            row.in_penalty = update.in_penalty

        if commit:
            db.session.commit()
        logger.debug("Saved %s progress rows for user %s", len(latest), user_id)
        return len(latest)

    @staticmethod
    def reset_progress(user_id: int, semester_id: Optional[int] = None) -> int:
        query = UserProgress.query.filter_by(user_id=user_id)
        if semester_id is not None:
            query = query.filter_by(semester_id=semester_id)
        deleted = query.delete(synchronize_session=False)
        db.session.commit()
        logger.info("Reset %s progress rows for user %s (semester=%s)", deleted, user_id, semester_id)
        return deleted

    @staticmethod
    def record_stat(user_id: int, semester_id: int, date: str, kind: str) -> StudyStats:
        """Increment the new/review counter of the (user, semester, date) row."""
        if kind not in (StudyStats.KIND_NEW, StudyStats.KIND_REVIEW):
            raise ValueError(f"Unknown stat kind: {kind}")

        row = StudyStats.query.filter_by(user_id=user_id, semester_id=semester_id, date=date).first()
        if row is None:
            row = StudyStats(user_id=user_id, semester_id=semester_id, date=date, new_count=0, review_count=0)
            db.session.add(row)

        if kind == StudyStats.KIND_NEW:
            row.new_count = (row.new_count or 0) + 1
        else:
            row.review_count = (row.review_count or 0) + 1

        db.session.commit()
        return row

    @staticmethod
    def get_stats(
        user_id: int,
        year: Optional[str] = None,
        semester_id: Optional[int] = None
    ) -> List[StudyStats]:
        query = StudyStats.query.filter_by(user_id=user_id)
        if year:
            query = query.filter(StudyStats.date.like(f"{year}%"))
        if semester_id is not None:
            query = query.filter_by(semester_id=semester_id)
        return query.order_by(StudyStats.date.asc()).all()
