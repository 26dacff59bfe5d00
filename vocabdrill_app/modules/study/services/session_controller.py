# File: vocabdrill_app/modules/study/services/session_controller.py
"""
Study Session Controller - drives one user's drill session across requests.

The drill context lives in a ``StudySessionState`` row between requests.
Each request loads it, runs exactly one reducer, performs the effects the
reducer asked for and stores the context again.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Sequence

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.attributes import flag_modified

from vocabdrill_app.core.error_handlers import ConflictError, NotFoundError, ValidationError
from vocabdrill_app.core.signals import session_completed, word_completed, word_pronounced
from vocabdrill_app.extensions import db
from vocabdrill_app.models import StudySessionState, UserProgress
from vocabdrill_app.utils.time_utils import format_date, study_today
from ..logics import drill_machine
from ..logics.drill_machine import (
    EFFECT_FINISH,
    EFFECT_PERSIST,
    EFFECT_PRONOUNCE,
    EFFECT_STAT,
    MODE_LEARN,
    MODE_QUIZ,
    MODE_SPELL,
    DrillContext,
    DrillError,
    DrillResult,
    Effect,
)
from ..logics.review_interval import compute_next
from ..logics.session_builder import KIND_NORMAL, SESSION_KINDS, build_session
from ..logics.session_word import ProgressSnapshot, SessionWord, WordWithProgress
from .progress_sink import ProgressSink
from .pronunciation import build_pronunciation_url
from .study_store import SqlStudyStore, StudyStore

logger = logging.getLogger(__name__)


def _snapshot(row: Optional[UserProgress]) -> Optional[ProgressSnapshot]:
    if row is None:
        return None
    return ProgressSnapshot(
        state=row.state,
        ef=row.ef,
        interval=row.interval,
        failure_count=row.failure_count or 0,
        next_review=row.next_review.isoformat() if row.next_review else None,
    )


class StudySessionController:
    """One user's study session. Build a new controller per request."""

    def __init__(
        self,
        user_id: int,
        store: Optional[StudyStore] = None,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None
    ):
        self.user_id = user_id
        self.store = store or SqlStudyStore()
        self.config = config if config is not None else current_app.config
        self.rng = rng
        self.state: Optional[StudySessionState] = db.session.get(StudySessionState, user_id)

    # === Settings ===

    @property
    def rollover_hour(self) -> int:
        return int(self.config.get('STUDY_DAY_ROLLOVER_HOUR', 0))

    @property
    def tz_name(self) -> str:
        return self.config.get('STUDY_TIMEZONE', 'UTC')

    def _today(self):
        return study_today(rollover_hour=self.rollover_hour, tz_name=self.tz_name)

    @property
    def has_session(self) -> bool:
        return self.state is not None

    # === Public operations ===

    def start(
        self,
        semester_ids: Sequence[int],
        kind: str = KIND_NORMAL,
        daily_new_cap: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Build a session over ``semester_ids`` and present its first word.

        A running session is ended first (its buffered progress flushed).
        An empty session is not an error: the response says there is nothing
        to study.
        """
        if not semester_ids:
            raise ValidationError('Select at least one semester')
        if kind not in SESSION_KINDS:
            raise ValidationError(f'Unknown session kind: {kind}')
        if daily_new_cap is None:
            daily_new_cap = int(self.config.get('DAILY_NEW_LIMIT', 20))
        if daily_new_cap < 0:
            raise ValidationError('Daily limit cannot be negative')

        if self.state is not None:
            logger.info("User %s started a new session, closing the previous one", self.user_id)
            self.exit()

        pool = self._load_pool(semester_ids)
        session_words = build_session(
            pool,
            kind=kind,
            daily_new_cap=daily_new_cap,
            rng=self.rng,
            extra_size=int(self.config.get('EXTRA_SESSION_SIZE', 20)),
            rollover_hour=self.rollover_hour,
        )
        if not session_words:
            logger.info("Nothing to study for user %s in semesters %s (%s)", self.user_id, semester_ids, kind)
            return {
                'active': False,
                'finished': True,
                'empty': True,
                'message': 'Nothing to study right now, all done for today!',
            }

        context = DrillContext(
            pool=session_words,
            option_pool=[(w.id, w.meaning) for w in pool],
            queue_window=int(self.config.get('QUEUE_WINDOW', drill_machine.QUEUE_WINDOW)),
        )
        self.state = StudySessionState(
            user_id=self.user_id,
            kind=kind,
            semester_ids=list(semester_ids),
            context={},
            pending_updates=[],
        )
        db.session.add(self.state)
        logger.info(
            "User %s started a %s session with %s words (%s new)",
            self.user_id, kind, len(session_words),
            sum(1 for w in session_words if w.is_new_this_session),
        )
        return self._apply(drill_machine.start(context, self.rng))

    def current(self) -> Dict[str, Any]:
        if self.state is None:
            return {'active': False, 'finished': False}
        return self._view(self._load_context(), {})

    def handle(self, event: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Feed one learner event (learn, quiz, spell, next) to the drill."""
        if self.state is None:
            raise NotFoundError('No active study session', resource='study_session')
        try:
            result = drill_machine.reduce(self._load_context(), event, payload, self.rng)
        except DrillError as exc:
            raise ConflictError(str(exc)) from exc
        return self._apply(result)

    def exit(self) -> Dict[str, Any]:
        """Leave the session; buffered progress is always flushed."""
        if self.state is None:
            return {'active': False, 'exited': False}
        context = self._load_context()
        flushed = self._sink().flush()
        summary = self._finish(context, finished=False)
        summary.update({'active': False, 'exited': True, 'flushed': flushed})
        return summary

    # === Internals ===

    def _load_pool(self, semester_ids: Sequence[int]) -> List[WordWithProgress]:
        words = []
        for semester_id in semester_ids:
            words.extend(self.store.get_words(semester_id))
        progress = {row.word_id: row for row in self.store.get_progress(self.user_id, semester_ids)}
        return [
            WordWithProgress(
                id=w.id,
                semester_id=w.semester_id,
                word=w.word,
                meaning=w.meaning,
                phonetic=w.phonetic,
                example_en=w.example_en,
                example_cn=w.example_cn,
                order=w.order or 0,
                progress=_snapshot(progress.get(w.id)),
            )
            for w in words
        ]

    def _load_context(self) -> DrillContext:
        return DrillContext.from_dict(self.state.context or {})

    def _sink(self) -> ProgressSink:
        return ProgressSink(
            self.store,
            self.user_id,
            flush_every=int(self.config.get('PROGRESS_FLUSH_EVERY', 5)),
            pending=self.state.pending_updates if self.state is not None else None,
        )

    def _apply(self, result: DrillResult) -> Dict[str, Any]:
        context = result.context
        sink = self._sink()
        extra: Dict[str, Any] = {}
        finished = False

        for effect in result.effects:
            if effect.kind == EFFECT_PERSIST:
                self._persist(context, effect, sink)
            elif effect.kind == EFFECT_STAT:
                self._record_stat(context, effect)
            elif effect.kind == EFFECT_PRONOUNCE:
                extra['pronunciation'] = self._pronounce(context, effect)
            elif effect.kind == EFFECT_FINISH:
                finished = True

        if finished:
            sink.flush()
            extra.update(self._finish(context, finished=True))
        else:
            self._save(context, sink)
        return self._view(context, extra)

    def _persist(self, context: DrillContext, effect: Effect, sink: ProgressSink) -> None:
        """
        Schedule the word and buffer the write; the session snapshot follows the write.

        A word without a progress row keeps an unstored snapshot, so it is
        still drilled as new for the rest of the session.
        """
        word = context.word(effect.word_id)
        if word is None:
            return
        snapshot = word.progress
        schedule = compute_next(
            effect.success,
            snapshot.ef if snapshot else None,
            snapshot.interval if snapshot else None,
            is_new=word.is_new,
            today=self._today(),
            rollover_hour=self.rollover_hour,
            tz_name=self.tz_name,
        )
        failure_count = (snapshot.failure_count if snapshot else 0) + (0 if effect.success else 1)
        state = UserProgress.STATE_REVIEW if effect.success else UserProgress.STATE_LEARNING

        if snapshot is None:
            snapshot = word.progress = ProgressSnapshot(stored=False)
        snapshot.state = state
        snapshot.ef = schedule.ef
        snapshot.interval = schedule.interval
        snapshot.failure_count = failure_count
        snapshot.next_review = schedule.next_review.isoformat()

        sink.record({
            'word_id': word.id,
            'semester_id': word.semester_id,
            'state': state,
            'next_review': snapshot.next_review,
            'ef': schedule.ef,
            'interval': schedule.interval,
            'failure_count': failure_count,
            'penalty_progress': word.penalty_progress,
            'in_penalty': word.in_penalty,
        })

    def _record_stat(self, context: DrillContext, effect: Effect) -> None:
        word = context.word(effect.word_id)
        if word is None:
            return
        self.store.record_stat(self.user_id, word.semester_id, format_date(self._today()), effect.stat_kind)
        word_completed.send(
            None,
            user_id=self.user_id,
            word_id=word.id,
            semester_id=word.semester_id,
            kind=effect.stat_kind,
        )

    def _pronounce(self, context: DrillContext, effect: Effect) -> Optional[str]:
        word = context.word(effect.word_id)
        if word is None:
            return None
        url = build_pronunciation_url(word.word, self.config.get('PRONUNCIATION_URL'))
        word_pronounced.send(None, user_id=self.user_id, word_id=word.id, word=word.word, url=url)
        return url

    def _save(self, context: DrillContext, sink: ProgressSink) -> None:
        self.state.context = context.to_dict()
        self.state.pending_updates = list(sink.pending)
        flag_modified(self.state, 'context')
        flag_modified(self.state, 'pending_updates')
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to store study session of user %s: %s", self.user_id, exc)
            db.session.rollback()

    def _finish(self, context: DrillContext, finished: bool) -> Dict[str, Any]:
        summary = {
            'kind': self.state.kind,
            'total_words': len(context.pool),
            'completed_words': context.completed_count,
        }
        try:
            db.session.delete(self.state)
            db.session.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to remove study session of user %s: %s", self.user_id, exc)
            db.session.rollback()
        self.state = None

        session_completed.send(None, user_id=self.user_id, finished=finished, **summary)
        logger.info(
            "User %s %s session: %s/%s words completed",
            self.user_id, 'finished' if finished else 'left', summary['completed_words'], summary['total_words'],
        )
        return summary

    def _view(self, context: DrillContext, extra: Dict[str, Any]) -> Dict[str, Any]:
        view: Dict[str, Any] = {
            'active': not context.finished,
            'finished': context.finished,
            'mode': context.mode,
            'word': _word_view(context.current, context.mode, context.waiting),
            'options': list(context.options),
            'waiting': context.waiting,
            'result': context.last_result,
            'progress': {
                'total': len(context.pool),
                'completed': context.completed_count,
                'queue': sum(1 for w in context.queue if w.is_pending),
            },
        }
        view.update(extra)
        return view


def _word_view(word: Optional[SessionWord], mode: Optional[str], waiting: bool) -> Optional[Dict[str, Any]]:
    """Learner-facing fields; the answer stays hidden until the word is graded."""
    if word is None:
        return None
    data = word.public_dict()
    if waiting or mode == MODE_LEARN:
        return data
    if mode == MODE_QUIZ:
        data.pop('meaning', None)
        data.pop('example_cn', None)
    elif mode == MODE_SPELL:
        data.pop('word', None)
        data.pop('phonetic', None)
        data.pop('example_en', None)
    return data
