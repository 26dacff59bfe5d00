# File: vocabdrill_app/modules/auth/services/__init__.py
"""Account services package."""
from .auth_service import AuthService

__all__ = ['AuthService']
