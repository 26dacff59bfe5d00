# File: vocabdrill_app/modules/progress/services/__init__.py
"""Progress services package."""
from .progress_service import ProgressService

__all__ = ['ProgressService']
