"""
Dashboard Service - per-user word counts over the selected semesters.

Counts:
    total   words in the semesters
    new     words without progress, or progress still ``new``
    learned words with progress beyond ``new``
    due     learned words whose next review has arrived
    hard    words failed more than ``hard_threshold`` times
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from vocabdrill_app.extensions import db
from vocabdrill_app.models import Semester, StudyStats, UserProgress, VocabWord
from vocabdrill_app.utils.time_utils import is_due, utcnow

logger = logging.getLogger(__name__)

DEFAULT_HARD_THRESHOLD = 3


def _empty_counts() -> Dict[str, int]:
    return {'total': 0, 'new': 0, 'learned': 0, 'due': 0, 'hard': 0}


class DashboardService:

    @staticmethod
    def _semester_ids(semester_ids: Optional[Sequence[int]]) -> List[int]:
        if semester_ids:
            return list(semester_ids)
        return [s.id for s in Semester.query.filter_by(is_active=True).all()]

    @staticmethod
    def get_overview(
        user_id: int,
        semester_ids: Optional[Sequence[int]] = None,
        now: Optional[datetime] = None,
        hard_threshold: int = DEFAULT_HARD_THRESHOLD,
        rollover_hour: int = 0
    ) -> Dict[str, Any]:
        now = now or utcnow()
        ids = DashboardService._semester_ids(semester_ids)
        per_semester: Dict[int, Dict[str, int]] = {sid: _empty_counts() for sid in ids}
        if not ids:
            return {'overall': _empty_counts(), 'semesters': {}}

        word_rows = (
            db.session.query(VocabWord.id, VocabWord.semester_id)
            .filter(VocabWord.semester_id.in_(ids))
            .all()
        )
        progress = {
            row.word_id: row
            for row in UserProgress.query.filter(
                UserProgress.user_id == user_id,
                UserProgress.semester_id.in_(ids),
            ).all()
        }

        for word_id, semester_id in word_rows:
            counts = per_semester[semester_id]
            counts['total'] += 1
            row = progress.get(word_id)
            if row is None or row.state == UserProgress.STATE_NEW:
                counts['new'] += 1
            else:
                counts['learned'] += 1
                if is_due(row.next_review, now, rollover_hour):
                    counts['due'] += 1
            if row is not None and (row.failure_count or 0) > hard_threshold:
                counts['hard'] += 1

        overall = _empty_counts()
        for counts in per_semester.values():
            for key, value in counts.items():
                overall[key] += value

        return {'overall': overall, 'semesters': per_semester}

    @staticmethod
    def get_hard_words(
        user_id: int,
        semester_ids: Optional[Sequence[int]] = None,
        hard_threshold: int = DEFAULT_HARD_THRESHOLD
    ) -> List[Dict[str, Any]]:
        """Words failed more than ``hard_threshold`` times, most failed first."""
        query = (
            db.session.query(VocabWord, UserProgress)
            .join(UserProgress, UserProgress.word_id == VocabWord.id)
            .filter(
                UserProgress.user_id == user_id,
                UserProgress.failure_count > hard_threshold,
            )
        )
        if semester_ids:
            query = query.filter(VocabWord.semester_id.in_(list(semester_ids)))

        rows = query.order_by(UserProgress.failure_count.desc(), VocabWord.id.asc()).all()
        result = []
        for word, progress in rows:
            item = word.to_dict()
            item['failure_count'] = progress.failure_count
            item['state'] = progress.state
            result.append(item)
        return result

    @staticmethod
    def get_today(user_id: int, date: str) -> Dict[str, int]:
        """New/review counts of one study date summed over all semesters."""
        rows = StudyStats.query.filter_by(user_id=user_id, date=date).all()
        return {
            'new': sum(r.new_count or 0 for r in rows),
            'review': sum(r.review_count or 0 for r in rows),
        }
