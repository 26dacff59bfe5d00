"""Semester and vocabulary word models."""

from __future__ import annotations

from sqlalchemy.sql import func

from ..db_instance import db


class Semester(db.Model):
    """An administrator-defined study set."""

    __tablename__ = 'semesters'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(50), unique=True, nullable=False, index=True)
    description = db.Column(db.Text)
    order = db.Column(db.Integer, default=0, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())

    words = db.relationship(
        'VocabWord',
        backref='semester',
        lazy='dynamic',
        cascade='all, delete-orphan',
        order_by='VocabWord.order',
    )

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'order': self.order,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class VocabWord(db.Model):
    """Dictionary entry. Never mutated by studying."""

    __tablename__ = 'vocab_words'

    id = db.Column(db.Integer, primary_key=True)
    semester_id = db.Column(
        db.Integer, db.ForeignKey('semesters.id', ondelete='CASCADE'), nullable=False, index=True
    )
    word = db.Column(db.String(200), nullable=False, index=True)
    phonetic = db.Column(db.String(200))
    meaning = db.Column(db.Text, nullable=False)
    example_en = db.Column(db.Text)
    example_cn = db.Column(db.Text)
    order = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())

    progress_rows = db.relationship(
        'UserProgress', backref='word', lazy='dynamic', cascade='all, delete-orphan'
    )

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.id,
            'semester_id': self.semester_id,
            'word': self.word,
            'phonetic': self.phonetic,
            'meaning': self.meaning,
            'example_en': self.example_en,
            'example_cn': self.example_cn,
            'order': self.order,
        }
