"""
Drill State Machine - pure reducers over an explicit session context.

Every transition takes a ``DrillContext`` and returns a new one together with
the side-effects the caller must perform (persist progress, record a stat,
play the pronunciation). Nothing here touches the database or Flask.

Word lifecycle inside a session::

    unseen(0) -> learn shown(1) -> quiz passed(1.5) -> complete(2)

Any miss sends the word back to 0 with ``in_penalty`` set; a word in penalty
needs ``PENALTY_STREAK`` consecutive correct spellings to complete.
"""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from .session_word import SessionWord, TempStep

MODE_LEARN = 'learn'
MODE_QUIZ = 'quiz'
MODE_SPELL = 'spell'

EVENT_START = 'start'
EVENT_LEARN = 'learn'
EVENT_QUIZ = 'quiz'
EVENT_SPELL = 'spell'
EVENT_NEXT = 'next'

EFFECT_PERSIST = 'persist'
EFFECT_STAT = 'stat'
EFFECT_PRONOUNCE = 'pronounce'
EFFECT_FINISH = 'finish'

QUEUE_WINDOW = 30
PENALTY_STREAK = 3
QUIZ_DISTRACTORS = 3


class DrillError(ValueError):
    """An event that does not fit the current drill state."""


@dataclass
class Effect:
    kind: str
    word_id: Optional[int] = None
    success: Optional[bool] = None
    stat_kind: Optional[str] = None


@dataclass
class DrillContext:
    pool: List[SessionWord] = field(default_factory=list)
    option_pool: List[Tuple[int, str]] = field(default_factory=list)  # (word_id, meaning)
    queue_ids: List[int] = field(default_factory=list)
    current_id: Optional[int] = None
    mode: Optional[str] = None
    options: List[str] = field(default_factory=list)
    waiting: bool = False
    last_result: Optional[Dict[str, Any]] = None
    finished: bool = False
    queue_window: int = QUEUE_WINDOW

    def __post_init__(self):
        # at least one word must fit the queue
        self.queue_window = max(1, int(self.queue_window))

    def word(self, word_id: Optional[int]) -> Optional[SessionWord]:
        for w in self.pool:
            if w.id == word_id:
                return w
        return None

    @property
    def current(self) -> Optional[SessionWord]:
        return self.word(self.current_id)

    @property
    def queue(self) -> List[SessionWord]:
        by_id = {w.id: w for w in self.pool}
        return [by_id[i] for i in self.queue_ids if i in by_id]

    @property
    def completed_count(self) -> int:
        return sum(1 for w in self.pool if not w.is_pending)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pool': [w.to_dict() for w in self.pool],
            'option_pool': [[i, m] for i, m in self.option_pool],
            'queue_ids': list(self.queue_ids),
            'current_id': self.current_id,
            'mode': self.mode,
            'options': list(self.options),
            'waiting': self.waiting,
            'last_result': self.last_result,
            'finished': self.finished,
            'queue_window': self.queue_window,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DrillContext':
        return cls(
            pool=[SessionWord.from_dict(w) for w in data.get('pool') or []],
            option_pool=[(int(i), m) for i, m in data.get('option_pool') or []],
            queue_ids=list(data.get('queue_ids') or []),
            current_id=data.get('current_id'),
            mode=data.get('mode'),
            options=list(data.get('options') or []),
            waiting=bool(data.get('waiting')),
            last_result=data.get('last_result'),
            finished=bool(data.get('finished')),
            queue_window=data.get('queue_window') or QUEUE_WINDOW,
        )


class DrillResult(NamedTuple):
    context: DrillContext
    effects: List[Effect]


# === Pure helpers ===

def select_mode(word: SessionWord) -> str:
    """Pick the drill for a word from its persisted state and session step."""
    if word.is_new:
        if word.temp_step == TempStep.UNSEEN:
            return MODE_LEARN
        if word.temp_step == TempStep.LEARN_SHOWN:
            return MODE_QUIZ
        return MODE_SPELL
    if word.temp_step == TempStep.UNSEEN:
        return MODE_QUIZ
    return MODE_SPELL


def pick_next(
    pending: Sequence[SessionWord],
    current_id: Optional[int],
    rng: Optional[random.Random] = None
) -> Optional[SessionWord]:
    """Uniform pick among pending words, never repeating the current one if avoidable."""
    if not pending:
        return None
    rng = rng or random
    candidates = [w for w in pending if w.id != current_id]
    if candidates:
        return rng.choice(candidates)
    return pending[0]


def quiz_options(
    word: SessionWord,
    option_pool: Sequence[Tuple[int, str]],
    rng: Optional[random.Random] = None
) -> List[str]:
    """Correct meaning plus up to three meanings of other words, shuffled.

    Other words may share the correct meaning's text; that is not filtered.
    """
    rng = rng or random
    others = [meaning for word_id, meaning in option_pool if word_id != word.id]
    distractors = rng.sample(others, min(QUIZ_DISTRACTORS, len(others)))
    options = [word.meaning] + distractors
    rng.shuffle(options)
    return options


def check_spelling(answer: Optional[str], word: str) -> bool:
    """Case-insensitive comparison of the trimmed answer."""
    return (answer or '').strip().lower() == (word or '').strip().lower()


def _fail(word: SessionWord) -> None:
    word.temp_step = TempStep.UNSEEN
    word.in_penalty = True
    word.penalty_progress = 0
    if word.progress is not None:
        word.progress.state = 'learning'


def _complete(word: SessionWord) -> None:
    word.temp_step = TempStep.COMPLETE
    word.in_penalty = False
    word.penalty_progress = 0
    if word.progress is not None:
        word.progress.state = 'review'


def _require_mode(context: DrillContext, mode: str) -> SessionWord:
    if context.finished:
        raise DrillError('Session already finished')
    if context.mode != mode:
        raise DrillError(f'Expected mode {mode!r}, current mode is {context.mode!r}')
    if context.waiting:
        raise DrillError('Answer already given, advance to the next word')
    word = context.current
    if word is None:
        raise DrillError('No current word')
    return word


def _show_next(context: DrillContext, rng, effects: List[Effect]) -> None:
    """Move to the next pending word, refilling the queue window from the pool when needed."""
    context.waiting = False
    context.last_result = None
    context.options = []

    pending = [w for w in context.queue if w.is_pending]
    if not pending:
        remaining = [w for w in context.pool if w.is_pending]
        if not remaining:
            context.finished = True
            context.current_id = None
            context.mode = None
            context.queue_ids = []
            effects.append(Effect(EFFECT_FINISH))
            return
        context.queue_ids = [w.id for w in remaining[:context.queue_window]]
        pending = [w for w in context.queue if w.is_pending]

    word = pick_next(pending, context.current_id, rng)
    context.current_id = word.id
    context.mode = select_mode(word)
    if context.mode == MODE_QUIZ:
        option_pool = context.option_pool or [(w.id, w.meaning) for w in context.pool]
        context.options = quiz_options(word, option_pool, rng)


# === Reducers ===

def start(context: DrillContext, rng: Optional[random.Random] = None) -> DrillResult:
    """Fill the first queue window and present the first word."""
    context = copy.deepcopy(context)
    effects: List[Effect] = []
    context.finished = False
    context.current_id = None
    context.queue_ids = [w.id for w in context.pool if w.is_pending][:context.queue_window]
    _show_next(context, rng, effects)
    return DrillResult(context, effects)


def acknowledge_learn(context: DrillContext, rng: Optional[random.Random] = None) -> DrillResult:
    """The learner has read the meaning; no persistence."""
    context = copy.deepcopy(context)
    word = _require_mode(context, MODE_LEARN)
    word.temp_step = TempStep.LEARN_SHOWN
    effects: List[Effect] = []
    _show_next(context, rng, effects)
    return DrillResult(context, effects)


def answer_quiz(context: DrillContext, choice: Optional[str]) -> DrillResult:
    """Grade a multiple-choice answer. The word stays on screen until ``advance``."""
    context = copy.deepcopy(context)
    word = _require_mode(context, MODE_QUIZ)
    effects: List[Effect] = []

    correct = choice == word.meaning
    if correct:
        word.temp_step = TempStep.QUIZ_PASSED
        effects.append(Effect(EFFECT_PRONOUNCE, word.id))
    else:
        _fail(word)
        effects.append(Effect(EFFECT_PERSIST, word.id, success=False))

    context.waiting = True
    context.last_result = {
        'mode': MODE_QUIZ,
        'correct': correct,
        'correct_answer': word.meaning,
        'choice': choice,
    }
    return DrillResult(context, effects)


def answer_spelling(context: DrillContext, answer: Optional[str]) -> DrillResult:
    """Grade a spelling attempt, running the penalty loop for words in remediation."""
    context = copy.deepcopy(context)
    word = _require_mode(context, MODE_SPELL)
    effects: List[Effect] = []
    result: Dict[str, Any] = {'mode': MODE_SPELL, 'correct_answer': word.word, 'answer': answer}

    if check_spelling(answer, word.word):
        effects.append(Effect(EFFECT_PRONOUNCE, word.id))
        result['correct'] = True
        if word.in_penalty:
            word.penalty_progress += 1
            if word.penalty_progress >= PENALTY_STREAK:
                _complete(word)
                effects.append(Effect(EFFECT_PERSIST, word.id, success=True))
                effects.append(Effect(EFFECT_STAT, word.id, stat_kind='review'))
                result['completed'] = True
            else:
                result['completed'] = False
                result['need_more'] = PENALTY_STREAK - word.penalty_progress
        else:
            _complete(word)
            effects.append(Effect(EFFECT_PERSIST, word.id, success=True))
            effects.append(
                Effect(EFFECT_STAT, word.id, stat_kind='new' if word.is_new_this_session else 'review')
            )
            result['completed'] = True
    else:
        _fail(word)
        effects.append(Effect(EFFECT_PERSIST, word.id, success=False))
        result['correct'] = False
        result['completed'] = False

    context.waiting = True
    context.last_result = result
    return DrillResult(context, effects)


def advance(context: DrillContext, rng: Optional[random.Random] = None) -> DrillResult:
    """Leave an answered quiz/spelling screen and present the next word."""
    context = copy.deepcopy(context)
    if context.finished:
        raise DrillError('Session already finished')
    if not context.waiting:
        raise DrillError('Nothing to advance from, answer the current word first')
    effects: List[Effect] = []
    _show_next(context, rng, effects)
    return DrillResult(context, effects)


def reduce(
    context: DrillContext,
    event: str,
    payload: Optional[Dict[str, Any]] = None,
    rng: Optional[random.Random] = None
) -> DrillResult:
    """Dispatch one learner event to its reducer."""
    payload = payload or {}
    if event == EVENT_START:
        return start(context, rng)
    if event == EVENT_LEARN:
        return acknowledge_learn(context, rng)
    if event == EVENT_QUIZ:
        return answer_quiz(context, payload.get('choice'))
    if event == EVENT_SPELL:
        return answer_spelling(context, payload.get('answer'))
    if event == EVENT_NEXT:
        return advance(context, rng)
    raise DrillError(f'Unknown event {event!r}')
