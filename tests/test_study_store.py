import logging

from sqlalchemy.exc import OperationalError

from vocabdrill_app import db
from vocabdrill_app.models import StudyStats, User, UserProgress
from vocabdrill_app.modules.auth.services.auth_service import AuthService
from vocabdrill_app.modules.study.services.study_store import SqlStudyStore
from vocabdrill_app.modules.vocabulary.services.vocabulary_service import VocabularyService

from conftest import login


def _broken(*_args, **_kwargs):
    raise OperationalError('SELECT', {}, Exception('database is locked'))


def test_read_failure_returns_empty(app, semester, monkeypatch, caplog):
    monkeypatch.setattr(VocabularyService, 'get_words', staticmethod(_broken))

    with caplog.at_level(logging.WARNING):
        assert SqlStudyStore().get_words(semester.id) == []
    assert 'Failed to load words' in caplog.text


def test_invalid_write_is_dropped(app, caplog):
    with caplog.at_level(logging.ERROR):
        assert SqlStudyStore().save_progress(1, [{'state': 'review'}]) is False
    assert 'Dropping 1 progress updates' in caplog.text
    assert UserProgress.query.count() == 0


def test_save_and_record_stat(app, semester):
    user = User(username='store_user')
    db.session.add(user)
    db.session.commit()
    store = SqlStudyStore()
    word_id = semester.words.first().id

    assert store.save_progress(user.id, [{'word_id': word_id, 'semester_id': semester.id, 'state': 'review'}])
    assert store.record_stat(user.id, semester.id, '2024-03-10', 'new')
    assert store.record_stat(user.id, semester.id, '2024-03-10', 'new')

    assert [row.word_id for row in store.get_progress(user.id, [semester.id])] == [word_id]
    assert StudyStats.query.one().new_count == 2
    assert store.get_progress(user.id, []) == []


def test_bad_stat_kind_is_dropped(app, semester):
    assert SqlStudyStore().record_stat(1, semester.id, '2024-03-10', 'bogus') is False


def test_login_through_store(app):
    user, is_new = SqlStudyStore().login('store_login')
    assert is_new is True
    assert SqlStudyStore().login('store_login')[1] is False
    assert user.last_login_at is not None


def test_semester_listing_survives_store_read_failure(client, semester, monkeypatch):
    monkeypatch.setattr(VocabularyService, 'get_semesters', staticmethod(_broken))

    response = client.get('/api/semesters')

    assert response.status_code == 200
    assert response.get_json()['semesters'] == []


def test_login_store_failure_is_a_json_error(client, monkeypatch):
    monkeypatch.setattr(AuthService, 'login_or_register', staticmethod(_broken))

    response = login(client, 'dave')

    assert response.status_code == 503
    assert response.get_json()['code'] == 'STORE_ERROR'
