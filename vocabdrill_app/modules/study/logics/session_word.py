"""
In-session word records.

``WordWithProgress`` is a vocabulary entry joined with the user's progress
snapshot; ``SessionWord`` adds the transient drill fields. Both serialize to
plain dicts so a running session can be stored between requests.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional


class TempStep:
    """Per-session step of a word."""
    UNSEEN = 0
    LEARN_SHOWN = 1
    QUIZ_PASSED = 1.5
    COMPLETE = 2


@dataclass
class ProgressSnapshot:
    state: str = 'new'
    ef: int = 25
    interval: int = 0
    failure_count: int = 0
    next_review: Optional[str] = None  # ISO-8601, UTC
    stored: bool = True  # False when the word had no progress row at session start

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['ProgressSnapshot']:
        if not data:
            return None
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class WordWithProgress:
    id: int
    semester_id: int
    word: str
    meaning: str
    phonetic: Optional[str] = None
    example_en: Optional[str] = None
    example_cn: Optional[str] = None
    order: int = 0
    progress: Optional[ProgressSnapshot] = None

    @property
    def is_new(self) -> bool:
        """No stored progress yet, or progress still in the ``new`` state."""
        if self.progress is None or not self.progress.stored:
            return True
        return self.progress.state == 'new'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        values['progress'] = ProgressSnapshot.from_dict(data.get('progress'))
        return cls(**values)


@dataclass
class SessionWord(WordWithProgress):
    temp_step: float = TempStep.UNSEEN
    in_penalty: bool = False
    penalty_progress: int = 0
    is_new_this_session: bool = False

    @property
    def is_pending(self) -> bool:
        return self.temp_step < TempStep.COMPLETE

    @classmethod
    def wrap(cls, word: WordWithProgress) -> 'SessionWord':
        """Wrap a pool word with fresh drill fields; the new/review class is frozen here."""
        progress = None
        if word.progress is not None:
            progress = ProgressSnapshot(**asdict(word.progress))
        return cls(
            id=word.id,
            semester_id=word.semester_id,
            word=word.word,
            meaning=word.meaning,
            phonetic=word.phonetic,
            example_en=word.example_en,
            example_cn=word.example_cn,
            order=word.order,
            progress=progress,
            temp_step=TempStep.UNSEEN,
            in_penalty=False,
            penalty_progress=0,
            is_new_this_session=word.is_new,
        )

    def public_dict(self) -> Dict[str, Any]:
        """Fields shown to the learner."""
        return {
            'id': self.id,
            'semester_id': self.semester_id,
            'word': self.word,
            'phonetic': self.phonetic,
            'meaning': self.meaning,
            'example_en': self.example_en,
            'example_cn': self.example_cn,
            'temp_step': self.temp_step,
            'in_penalty': self.in_penalty,
            'penalty_progress': self.penalty_progress,
            'is_new_this_session': self.is_new_this_session,
        }
