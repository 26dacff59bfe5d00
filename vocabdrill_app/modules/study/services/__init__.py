# File: vocabdrill_app/modules/study/services/__init__.py
"""
Study Services
==============
The side-effecting half of the study loop.

Contains:
- StudyStore / SqlStudyStore: persistence collaborator
- ProgressSink: batched progress writes
- StudySessionController: runs the drill reducers across requests
"""

from .study_store import SqlStudyStore, StudyStore
from .progress_sink import ProgressSink
from .pronunciation import build_pronunciation_url
from .session_controller import StudySessionController

__all__ = [
    'StudyStore',
    'SqlStudyStore',
    'ProgressSink',
    'build_pronunciation_url',
    'StudySessionController',
]
