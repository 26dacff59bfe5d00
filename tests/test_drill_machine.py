"""
Tests for the drill state machine.

Tests cover:
- Mode selection per word state
- learn -> quiz -> spell path of a new word
- Penalty loop needing three consecutive correct spellings
- Anti-repeat choice of the next word
- Queue window refill and session end
"""

import random

import pytest

from vocabdrill_app.modules.study.logics import drill_machine as dm
from vocabdrill_app.modules.study.logics.session_word import (
    ProgressSnapshot,
    SessionWord,
    TempStep,
    WordWithProgress,
)


def make_session_word(word_id, word=None, meaning=None, learned=False):
    progress = ProgressSnapshot(state='review', ef=25, interval=3) if learned else None
    return SessionWord.wrap(WordWithProgress(
        id=word_id,
        semester_id=1,
        word=word or f'word{word_id}',
        meaning=meaning or f'meaning {word_id}',
        progress=progress,
    ))


def make_context(words, window=dm.QUEUE_WINDOW):
    return dm.DrillContext(
        pool=words,
        option_pool=[(w.id, w.meaning) for w in words],
        queue_window=window,
    )


def effect_kinds(result):
    return [e.kind for e in result.effects]


class TestSelectMode:

    def test_new_word_unseen_learns(self):
        assert dm.select_mode(make_session_word(1)) == dm.MODE_LEARN

    def test_new_word_after_learn_quizzes(self):
        word = make_session_word(1)
        word.temp_step = TempStep.LEARN_SHOWN
        assert dm.select_mode(word) == dm.MODE_QUIZ

    def test_new_word_after_quiz_spells(self):
        word = make_session_word(1)
        word.temp_step = TempStep.QUIZ_PASSED
        assert dm.select_mode(word) == dm.MODE_SPELL

    def test_review_word_unseen_quizzes(self):
        assert dm.select_mode(make_session_word(1, learned=True)) == dm.MODE_QUIZ

    def test_review_word_after_quiz_spells(self):
        word = make_session_word(1, learned=True)
        word.temp_step = TempStep.QUIZ_PASSED
        assert dm.select_mode(word) == dm.MODE_SPELL

    def test_unstored_progress_still_learns(self):
        word = make_session_word(1)
        word.progress = ProgressSnapshot(state='learning', ef=23, interval=1, stored=False)
        assert word.is_new
        assert dm.select_mode(word) == dm.MODE_LEARN


class TestSingleNewWord:

    def test_full_path(self):
        context = make_context([make_session_word(1, 'apple', 'n. 苹果')])

        result = dm.start(context)
        assert result.context.mode == dm.MODE_LEARN
        assert result.effects == []

        result = dm.acknowledge_learn(result.context)
        assert result.context.mode == dm.MODE_QUIZ
        assert 'n. 苹果' in result.context.options
        assert result.effects == []

        result = dm.answer_quiz(result.context, 'n. 苹果')
        assert result.context.last_result['correct'] is True
        assert result.context.current.temp_step == TempStep.QUIZ_PASSED
        assert effect_kinds(result) == [dm.EFFECT_PRONOUNCE]

        result = dm.advance(result.context)
        assert result.context.mode == dm.MODE_SPELL

        result = dm.answer_spelling(result.context, '  Apple ')
        assert effect_kinds(result) == [dm.EFFECT_PRONOUNCE, dm.EFFECT_PERSIST, dm.EFFECT_STAT]
        persist = result.effects[1]
        assert persist.success is True
        assert result.effects[2].stat_kind == 'new'
        assert result.context.word(1).temp_step == TempStep.COMPLETE

        result = dm.advance(result.context)
        assert result.context.finished is True
        assert effect_kinds(result) == [dm.EFFECT_FINISH]

    def test_reducers_do_not_mutate_input(self):
        context = make_context([make_session_word(1)])
        started = dm.start(context).context

        dm.acknowledge_learn(started)

        assert started.mode == dm.MODE_LEARN
        assert started.word(1).temp_step == TempStep.UNSEEN


class TestPenaltyLoop:

    def _spelling_context(self):
        word = make_session_word(1, 'apple', 'n. 苹果', learned=True)
        word.temp_step = TempStep.QUIZ_PASSED
        context = make_context([word])
        context = dm.start(context).context
        assert context.mode == dm.MODE_SPELL
        return context

    def _fail_spelling(self):
        result = dm.answer_spelling(self._spelling_context(), 'aple')
        assert effect_kinds(result) == [dm.EFFECT_PERSIST]
        assert result.effects[0].success is False
        word = result.context.word(1)
        assert word.in_penalty is True
        assert word.temp_step == TempStep.UNSEEN
        assert word.progress.state == 'learning'
        return result.context

    def _to_spell(self, context):
        """Advance and pass the quiz until the word is on the spelling screen."""
        context = dm.advance(context).context
        if context.mode == dm.MODE_QUIZ:
            context = dm.answer_quiz(context, 'n. 苹果').context
            context = dm.advance(context).context
        assert context.mode == dm.MODE_SPELL
        return context

    def test_three_correct_spellings_complete(self):
        context = self._fail_spelling()

        for streak in (1, 2):
            context = self._to_spell(context)
            result = dm.answer_spelling(context, 'apple')
            assert result.context.word(1).penalty_progress == streak
            assert result.context.last_result['completed'] is False
            assert result.context.last_result['need_more'] == 3 - streak
            assert dm.EFFECT_PERSIST not in effect_kinds(result)
            context = result.context

        context = self._to_spell(context)
        result = dm.answer_spelling(context, 'apple')
        word = result.context.word(1)
        assert word.temp_step == TempStep.COMPLETE
        assert word.in_penalty is False
        assert word.penalty_progress == 0
        assert effect_kinds(result) == [dm.EFFECT_PRONOUNCE, dm.EFFECT_PERSIST, dm.EFFECT_STAT]
        assert result.effects[2].stat_kind == 'review'

    def test_two_correct_spellings_leave_word_incomplete(self):
        context = self._fail_spelling()
        for _ in range(2):
            context = self._to_spell(context)
            context = dm.answer_spelling(context, 'apple').context

        assert context.word(1).is_pending
        assert context.word(1).in_penalty is True

    def test_miss_in_penalty_resets_streak(self):
        context = self._fail_spelling()
        context = self._to_spell(context)
        context = dm.answer_spelling(context, 'apple').context
        assert context.word(1).penalty_progress == 1

        context = self._to_spell(context)
        result = dm.answer_spelling(context, 'wrong')

        assert result.context.word(1).penalty_progress == 0
        assert result.context.word(1).in_penalty is True
        assert result.effects[0].success is False

    def test_quiz_miss_enters_penalty(self):
        context = make_context([make_session_word(1, learned=True), make_session_word(2, learned=True)])
        context = dm.start(context, random.Random(0)).context
        assert context.mode == dm.MODE_QUIZ

        wrong = next(o for o in context.options if o != context.current.meaning)
        result = dm.answer_quiz(context, wrong)

        assert result.context.current.in_penalty is True
        assert result.context.current.temp_step == TempStep.UNSEEN
        assert effect_kinds(result) == [dm.EFFECT_PERSIST]
        assert result.context.last_result['correct_answer'] == context.current.meaning


class TestNextWordChoice:

    def test_never_repeats_current_when_others_pending(self):
        rng = random.Random(42)
        pending = [make_session_word(i) for i in range(3)]
        for _ in range(200):
            assert dm.pick_next(pending, 1, rng).id != 1

    def test_repeats_when_only_word(self):
        word = make_session_word(7)
        assert dm.pick_next([word], 7).id == 7

    def test_empty(self):
        assert dm.pick_next([], None) is None


class TestQueue:

    def test_window_limits_queue_and_refills(self):
        words = [make_session_word(i, learned=True) for i in range(5)]
        for w in words:
            w.temp_step = TempStep.QUIZ_PASSED
        context = dm.start(make_context(words, window=2), random.Random(5)).context
        assert len(context.queue_ids) == 2

        seen = set()
        while not context.finished:
            word = context.current
            seen.add(word.id)
            context = dm.answer_spelling(context, word.word).context
            context = dm.advance(context).context

        assert seen == {0, 1, 2, 3, 4}
        assert context.completed_count == 5

    def test_zero_window_still_queues_one_word(self):
        words = [make_session_word(i, learned=True) for i in range(3)]
        for w in words:
            w.temp_step = TempStep.QUIZ_PASSED
        context = dm.start(make_context(words, window=0), random.Random(2)).context
        assert context.queue_window == 1
        assert len(context.queue_ids) == 1

        while not context.finished:
            context = dm.answer_spelling(context, context.current.word).context
            context = dm.advance(context).context

        assert context.completed_count == 3

    def test_context_round_trips_through_dict(self):
        context = dm.start(make_context([make_session_word(1), make_session_word(2)])).context
        restored = dm.DrillContext.from_dict(context.to_dict())
        assert restored.to_dict() == context.to_dict()


class TestQuizOptions:

    def test_correct_plus_three_distractors(self):
        words = [make_session_word(i) for i in range(6)]
        options = dm.quiz_options(words[0], [(w.id, w.meaning) for w in words], random.Random(1))
        assert len(options) == 4
        assert len(set(options)) == 4
        assert words[0].meaning in options

    def test_small_pool(self):
        words = [make_session_word(i) for i in range(2)]
        options = dm.quiz_options(words[0], [(w.id, w.meaning) for w in words])
        assert sorted(options) == sorted(w.meaning for w in words)


class TestGuards:

    def test_wrong_event_for_mode(self):
        context = dm.start(make_context([make_session_word(1)])).context
        with pytest.raises(dm.DrillError):
            dm.answer_spelling(context, 'word1')

    def test_advance_requires_answer(self):
        context = dm.start(make_context([make_session_word(1, learned=True)])).context
        with pytest.raises(dm.DrillError):
            dm.advance(context)

    def test_unknown_event(self):
        with pytest.raises(dm.DrillError):
            dm.reduce(make_context([]), 'dance')

    def test_start_with_empty_pool_finishes(self):
        result = dm.start(make_context([]))
        assert result.context.finished is True
        assert effect_kinds(result) == [dm.EFFECT_FINISH]
