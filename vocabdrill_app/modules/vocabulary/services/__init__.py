# File: vocabdrill_app/modules/vocabulary/services/__init__.py
"""
Vocabulary Services
===================
Semester and word management, plus tabular word imports.
"""

from .vocabulary_service import VocabularyService
from .import_service import parse_word_records, read_word_file

__all__ = [
    'VocabularyService',
    'parse_word_records',
    'read_word_file',
]
