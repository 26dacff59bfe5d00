import logging

from vocabdrill_app.modules.study.services.progress_sink import ProgressSink
from vocabdrill_app.modules.study.services.study_store import StudyStore


class RecordingStore(StudyStore):
    """In-memory store that records every batch it receives."""

    def __init__(self, fail=False):
        self.batches = []
        self.fail = fail

    def get_semesters(self):
        return []

    def get_words(self, semester_id):
        return []

    def get_progress(self, user_id, semester_ids):
        return []

    def save_progress(self, user_id, updates):
        self.batches.append(list(updates))
        return not self.fail

    def record_stat(self, user_id, semester_id, date, kind):
        return True

    def login(self, username, password=None):
        raise NotImplementedError


def update(word_id):
    return {'word_id': word_id, 'semester_id': 1, 'state': 'review'}


def test_flushes_on_every_fifth_record():
    store = RecordingStore()
    sink = ProgressSink(store, user_id=1)

    flushed = [sink.record(update(i)) for i in range(5)]

    assert flushed == [False, False, False, False, True]
    assert len(store.batches) == 1
    assert [u['word_id'] for u in store.batches[0]] == [0, 1, 2, 3, 4]
    assert len(sink) == 0


def test_twelve_records_make_two_batches_and_keep_two():
    store = RecordingStore()
    sink = ProgressSink(store, user_id=1)

    for i in range(12):
        sink.record(update(i))

    assert [len(b) for b in store.batches] == [5, 5]
    assert len(sink) == 2

    assert sink.flush() == 2
    assert [len(b) for b in store.batches] == [5, 5, 2]


def test_flush_of_empty_buffer_does_not_call_store():
    store = RecordingStore()
    assert ProgressSink(store, user_id=1).flush() == 0
    assert store.batches == []


def test_failed_flush_is_logged_and_dropped(caplog):
    store = RecordingStore(fail=True)
    sink = ProgressSink(store, user_id=1, flush_every=2)

    with caplog.at_level(logging.WARNING):
        sink.record(update(1))
        sink.record(update(2))

    assert len(store.batches) == 1
    assert len(sink) == 0
    assert 'dropped' in caplog.text

    sink.flush()
    assert len(store.batches) == 1


def test_resumes_from_pending_buffer():
    store = RecordingStore()
    sink = ProgressSink(store, user_id=1, pending=[update(1), update(2), update(3), update(4)])

    assert sink.record(update(5)) is True
    assert len(store.batches[0]) == 5
