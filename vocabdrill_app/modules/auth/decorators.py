# File: vocabdrill_app/modules/auth/decorators.py
from functools import wraps

from flask import abort
from flask_login import current_user

from vocabdrill_app.core.error_handlers import AuthorizationError


def admin_required(f):
    """Require a logged-in admin. 401 when anonymous, 403 otherwise."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)
        if not current_user.is_admin:
            raise AuthorizationError('Admin rights required')
        return f(*args, **kwargs)
    return decorated_function
