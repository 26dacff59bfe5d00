"""
Auth Service - name-based login with an optional password, plus the
admin-side user management.
"""

import logging
import re
from typing import List, Optional, Tuple

from vocabdrill_app.core.error_handlers import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from vocabdrill_app.extensions import db
from vocabdrill_app.models import User
from vocabdrill_app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_\u4e00-\u9fa5]+$')
USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 4


class AuthService:
    """Account operations. Raises the app's error types; routes turn them into JSON."""

    @staticmethod
    def validate_username(username: Optional[str]) -> str:
        """Return the trimmed username or raise ValidationError."""
        name = (username or '').strip()
        if not USERNAME_MIN_LENGTH <= len(name) <= USERNAME_MAX_LENGTH:
            raise ValidationError(
                f'Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters'
            )
        if not USERNAME_PATTERN.match(name):
            raise ValidationError('Username may only contain letters, digits, underscore or Chinese characters')
        return name

    @staticmethod
    def validate_password(password: Optional[str]) -> str:
        if not password or len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(f'Password must be at least {PASSWORD_MIN_LENGTH} characters')
        return password

    @staticmethod
    def get_by_username(username: str) -> Optional[User]:
        return User.query.filter_by(username=username).first()

    @staticmethod
    def login_or_register(username: Optional[str], password: Optional[str] = None) -> Tuple[User, bool]:
        """
        Log in by name, creating the account on first use.

        A new account takes ``password`` when one is given. An existing
        account with a password requires it to match.

        Returns:
            (user, is_new)
        """
        name = AuthService.validate_username(username)
        user = AuthService.get_by_username(name)
        is_new = user is None

        if is_new:
            user = User(username=name)
            if password:
                user.set_password(AuthService.validate_password(password))
            db.session.add(user)
            logger.info("Registered user %s", name)
        elif not user.check_password(password):
            logger.info("Rejected login for %s: wrong password", name)
            raise AuthorizationError('Wrong password')

        user.last_login_at = utcnow()
        db.session.commit()
        return user, is_new

    @staticmethod
    def change_password(user: User, current_password: Optional[str], new_password: Optional[str]) -> User:
        """Set a new password; the current one is checked only when the account has one."""
        new_password = AuthService.validate_password(new_password)
        if user.has_password and not user.check_password(current_password):
            raise AuthorizationError('Current password is wrong')
        user.set_password(new_password)
        db.session.commit()
        logger.info("User %s changed password", user.username)
        return user

    # === Admin ===

    @staticmethod
    def list_users() -> List[User]:
        return User.query.order_by(User.id.asc()).all()

    @staticmethod
    def create_user(username: Optional[str], password: Optional[str] = None, is_admin: bool = False) -> User:
        name = AuthService.validate_username(username)
        if AuthService.get_by_username(name) is not None:
            raise ConflictError('Username already exists')
        user = User(username=name, is_admin=bool(is_admin))
        if password:
            user.set_password(AuthService.validate_password(password))
        db.session.add(user)
        db.session.commit()
        logger.info("Admin created user %s (admin=%s)", name, user.is_admin)
        return user

    @staticmethod
    def update_user(
        user_id: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        is_admin: Optional[bool] = None
    ) -> User:
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFoundError('User not found', resource='user')

        if username is not None:
            name = AuthService.validate_username(username)
            other = AuthService.get_by_username(name)
            if other is not None and other.id != user.id:
                raise ConflictError('Username already exists')
            user.username = name
        if password:
            user.set_password(AuthService.validate_password(password))
        if is_admin is not None:
            user.is_admin = bool(is_admin)

        db.session.commit()
        return user

    @staticmethod
    def delete_user(user_id: int, acting_user_id: Optional[int] = None) -> None:
        """Delete a user with all progress, stats and session state."""
        if acting_user_id is not None and user_id == acting_user_id:
            raise ValidationError('You cannot delete your own account')
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFoundError('User not found', resource='user')
        db.session.delete(user)
        db.session.commit()
        logger.info("Deleted user %s", user_id)
