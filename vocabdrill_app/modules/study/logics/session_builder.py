"""Session Builder - selects the words of one study session."""

import random
from datetime import datetime
from typing import List, Optional, Sequence

from vocabdrill_app.utils.time_utils import is_due, parse_datetime, utcnow
from .session_word import SessionWord, WordWithProgress

KIND_NORMAL = 'normal'
KIND_EXTRA = 'extra'
SESSION_KINDS = (KIND_NORMAL, KIND_EXTRA)

DEFAULT_DAILY_NEW_CAP = 20
DEFAULT_EXTRA_SIZE = 20


def due_reviews(
    pool: Sequence[WordWithProgress],
    now: Optional[datetime] = None,
    rollover_hour: int = 0
) -> List[WordWithProgress]:
    """Words with non-new progress whose next review is not in the future."""
    now = now or utcnow()
    return [
        w for w in pool
        if not w.is_new and is_due(parse_datetime(w.progress.next_review), now, rollover_hour)
    ]


def new_words(pool: Sequence[WordWithProgress], limit: int) -> List[WordWithProgress]:
    """First ``limit`` words without progress (or still ``new``), in pool order."""
    return [w for w in pool if w.is_new][:max(0, limit)]


def learned_words(pool: Sequence[WordWithProgress]) -> List[WordWithProgress]:
    return [w for w in pool if not w.is_new]


def build_session(
    pool: Sequence[WordWithProgress],
    kind: str = KIND_NORMAL,
    daily_new_cap: int = DEFAULT_DAILY_NEW_CAP,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    extra_size: int = DEFAULT_EXTRA_SIZE,
    rollover_hour: int = 0
) -> List[SessionWord]:
    """
    Build the shuffled session pool.

    ``normal`` takes the due reviews followed by the capped new words,
    ``extra`` samples up to ``extra_size`` already-learned words regardless
    of due date. An empty result means there is nothing to study.
    ``rollover_hour`` is passed to the due check.
    """
    rng = rng or random.Random()

    if kind == KIND_EXTRA:
        learned = learned_words(pool)
        selected = rng.sample(learned, min(extra_size, len(learned)))
    else:
        selected = due_reviews(pool, now, rollover_hour) + new_words(pool, daily_new_cap)

    selected = list(selected)
    rng.shuffle(selected)
    return [SessionWord.wrap(w) for w in selected]
