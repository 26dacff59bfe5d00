"""
Vocabulary Service - semesters and their words.

Words are dictionary entries: studying never mutates them, only the admin
operations here do.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func

from vocabdrill_app.core.error_handlers import ConflictError, NotFoundError
from vocabdrill_app.core.signals import words_imported
from vocabdrill_app.extensions import db
from vocabdrill_app.models import Semester, UserProgress, VocabWord
from .import_service import parse_word_records

logger = logging.getLogger(__name__)


def _slugify(name: str) -> str:
    return re.sub(r'[^a-z0-9]+', '-', name.lower()).strip('-')


class VocabularyService:

    @staticmethod
    def get_semesters(include_inactive: bool = False) -> List[Semester]:
        query = Semester.query
        if not include_inactive:
            query = query.filter_by(is_active=True)
        return query.order_by(Semester.order.asc(), Semester.id.asc()).all()

    @staticmethod
    def get_semester(semester_id: int) -> Semester:
        semester = db.session.get(Semester, semester_id)
        if semester is None:
            raise NotFoundError('Semester not found', resource='semester')
        return semester

    @staticmethod
    def get_words(semester_id: int) -> List[VocabWord]:
        return (
            VocabWord.query.filter_by(semester_id=semester_id)
            .order_by(VocabWord.order.asc(), VocabWord.id.asc())
            .all()
        )

    @staticmethod
    def create_semester(
        name: str,
        slug: Optional[str] = None,
        description: Optional[str] = None,
        order: Optional[int] = None
    ) -> Semester:
        slug = _slugify(slug or name)
        if not slug:
            # Names without latin letters
            slug = f"semester-{(db.session.query(func.count(Semester.id)).scalar() or 0) + 1}"
        if Semester.query.filter_by(slug=slug).first() is not None:
            raise ConflictError(f"Semester '{slug}' already exists")

        if order is None:
            order = (db.session.query(func.max(Semester.order)).scalar() or 0) + 1

        semester = Semester(name=name, slug=slug, description=description, order=order)
        db.session.add(semester)
        db.session.commit()
        logger.info("Created semester %s (%s)", semester.id, slug)
        return semester

    @staticmethod
    def import_words(
        semester_id: int,
        records: Iterable[Any],
        clear_existing: bool = False,
        user_id: Optional[int] = None
    ) -> Dict[str, int]:
        """
        Append parsed records to a semester, after the current last word.

        Returns:
            {'imported': n, 'skipped': m, 'cleared': k}
        """
        VocabularyService.get_semester(semester_id)
        valid, skipped = parse_word_records(records)

        cleared = 0
        if clear_existing:
            cleared = VocabularyService._delete_words(semester_id)

        start = (
            db.session.query(func.max(VocabWord.order))
            .filter(VocabWord.semester_id == semester_id)
            .scalar()
        )
        start = 0 if start is None else start + 1

        for offset, record in enumerate(valid):
            db.session.add(VocabWord(
                semester_id=semester_id,
                word=record.word,
                phonetic=record.phonetic,
                meaning=record.meaning,
                example_en=record.example_en,
                example_cn=record.example_cn,
                order=start + offset,
            ))
        db.session.commit()

        logger.info(
            "Imported %s words into semester %s (skipped=%s, cleared=%s)",
            len(valid), semester_id, skipped, cleared
        )
        words_imported.send(None, user_id=user_id, semester_id=semester_id, imported=len(valid))
        return {'imported': len(valid), 'skipped': skipped, 'cleared': cleared}

    @staticmethod
    def _delete_words(semester_id: int) -> int:
        word_ids = db.select(VocabWord.id).where(VocabWord.semester_id == semester_id)
        UserProgress.query.filter(UserProgress.word_id.in_(word_ids)).delete(synchronize_session=False)
        return VocabWord.query.filter_by(semester_id=semester_id).delete(synchronize_session=False)

    @staticmethod
    def delete_semester_words(semester_id: int) -> int:
        """Delete all words of a semester together with everyone's progress on them."""
        VocabularyService.get_semester(semester_id)
        deleted = VocabularyService._delete_words(semester_id)
        db.session.commit()
        logger.info("Deleted %s words from semester %s", deleted, semester_id)
        return deleted

    @staticmethod
    def delete_word(word_id: int) -> None:
        word = db.session.get(VocabWord, word_id)
        if word is None:
            raise NotFoundError('Word not found', resource='word')
        UserProgress.query.filter_by(word_id=word_id).delete(synchronize_session=False)
        db.session.delete(word)
        db.session.commit()
        logger.info("Deleted word %s", word_id)
