# File: vocabdrill_app/modules/study/logics/__init__.py
"""
Study Logics
============
Pure functions (no DB, no Flask) for the study loop.

Contains:
- review_interval: spaced-repetition schedule
- session_builder: picks the words of a session
- session_word: per-word session state
- drill_machine: learn/quiz/spell state machine
"""

from .review_interval import ReviewSchedule, compute_next
from .session_builder import build_session
from .drill_machine import DrillContext, DrillError, DrillResult, Effect

__all__ = [
    'ReviewSchedule',
    'compute_next',
    'build_session',
    'DrillContext',
    'DrillError',
    'DrillResult',
    'Effect',
]
