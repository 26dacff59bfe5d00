"""User account model."""

from __future__ import annotations

from typing import Optional

from flask_login import UserMixin
from sqlalchemy.sql import func
from werkzeug.security import check_password_hash, generate_password_hash

from ..db_instance import db


class User(UserMixin, db.Model):
    """Application user. The password is optional: accounts without one log in by name."""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=True)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    last_login_at = db.Column(db.DateTime(timezone=True))

    progress = db.relationship(
        'UserProgress', backref='user', lazy='dynamic', cascade='all, delete-orphan'
    )
    study_stats = db.relationship(
        'StudyStats', backref='user', lazy='dynamic', cascade='all, delete-orphan'
    )
    session_state = db.relationship(
        'StudySessionState', uselist=False, backref='user', cascade='all, delete-orphan'
    )

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def set_password(self, password: Optional[str]) -> None:
        self.password_hash = generate_password_hash(password) if password else None

    def check_password(self, password: Optional[str]) -> bool:
        if not self.password_hash:
            return True
        if not password:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.id,
            'username': self.username,
            'isAdmin': self.is_admin,
            'hasPassword': self.has_password,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'lastLoginAt': self.last_login_at.isoformat() if self.last_login_at else None,
        }
