"""Study progress, daily statistics and stored session state."""

from __future__ import annotations

from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from ..db_instance import db


class UserProgress(db.Model):
    """Spaced-repetition state of one word for one user."""

    __tablename__ = 'user_progress'

    STATE_NEW = 'new'
    STATE_LEARNING = 'learning'
    STATE_REVIEW = 'review'
    STATES = (STATE_NEW, STATE_LEARNING, STATE_REVIEW)

    DEFAULT_EF = 25
    MIN_EF = 13
    MAX_EF = 25

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True
    )
    word_id = db.Column(
        db.Integer, db.ForeignKey('vocab_words.id', ondelete='CASCADE'), nullable=False, index=True
    )
    semester_id = db.Column(db.Integer, nullable=False, index=True)

    state = db.Column(db.String(20), default=STATE_NEW, nullable=False)
    next_review = db.Column(db.DateTime(timezone=True))
    ef = db.Column(db.Integer, default=DEFAULT_EF, nullable=False)  # ease factor x10
    interval = db.Column(db.Integer, default=0, nullable=False)  # days
    failure_count = db.Column(db.Integer, default=0, nullable=False)
    penalty_progress = db.Column(db.Integer, default=0, nullable=False)
    in_penalty = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        db.UniqueConstraint('user_id', 'word_id', name='_user_word_progress_uc'),
        db.Index('ix_user_progress_user_semester', 'user_id', 'semester_id'),
    )

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'word_id': self.word_id,
            'semester_id': self.semester_id,
            'state': self.state,
            'next_review': self.next_review.isoformat() if self.next_review else None,
            'ef': self.ef,
            'interval': self.interval,
            'failure_count': self.failure_count,
            'penalty_progress': self.penalty_progress,
            'in_penalty': self.in_penalty,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


class StudyStats(db.Model):
    """Per user, semester and calendar day counters. Display only."""

    __tablename__ = 'study_stats'

    KIND_NEW = 'new'
    KIND_REVIEW = 'review'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True
    )
    semester_id = db.Column(db.Integer, nullable=False)
    date = db.Column(db.String(10), nullable=False, index=True)  # YYYY-MM-DD
    new_count = db.Column(db.Integer, default=0, nullable=False)
    review_count = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        db.UniqueConstraint('user_id', 'semester_id', 'date', name='_user_semester_date_uc'),
    )

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'semester_id': self.semester_id,
            'date': self.date,
            'new_count': self.new_count,
            'review_count': self.review_count,
        }


class StudySessionState(db.Model):
    """
    Serialized drill context of the user's active study session.

    One row per user; removed when the session finishes or is exited.
    """

    __tablename__ = 'study_session_states'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    kind = db.Column(db.String(20), nullable=False, default='normal')
    semester_ids = db.Column(JSON, nullable=False, default=list)
    context = db.Column(JSON, nullable=False)
    pending_updates = db.Column(JSON, nullable=False, default=list)
    started_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
