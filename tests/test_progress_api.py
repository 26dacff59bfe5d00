from vocabdrill_app import db
from vocabdrill_app.models import StudyStats, User, UserProgress, VocabWord
from vocabdrill_app.modules.progress.schemas import ProgressUpdate
from vocabdrill_app.modules.progress.services.progress_service import ProgressService

from conftest import login


def _apple():
    return VocabWord.query.filter_by(word='apple').first()


def test_progress_upsert_and_read(client, semester):
    login(client, 'alice')
    apple = _apple()

    response = client.post('/api/progress', json={'progress': [
        {'wordId': apple.id, 'semesterId': semester.id, 'state': 'learning', 'ef': 23,
         'interval': 1, 'failureCount': 1, 'nextReview': '2024-03-11T00:00:00Z'},
    ]})
    assert response.status_code == 200
    assert response.get_json()['saved'] == 1

    # later write wins, failure count never decreases
    client.post('/api/progress', json={'progress': [
        {'wordId': apple.id, 'semesterId': semester.id, 'state': 'review', 'ef': 24,
         'interval': 3, 'failureCount': 0},
    ]})

    rows = client.get(f'/api/progress?semesterIds={semester.id}').get_json()['progress']
    assert len(rows) == 1
    assert rows[0]['state'] == 'review'
    assert rows[0]['interval'] == 3
    assert rows[0]['failure_count'] == 1
    assert UserProgress.query.count() == 1


def test_last_update_in_batch_wins(app, semester):
    user = User(username='batch')
    db.session.add(user)
    db.session.commit()
    apple = _apple()

    saved = ProgressService.save_progress(user.id, [
        ProgressUpdate(word_id=apple.id, semester_id=semester.id, state='learning', interval=1),
        ProgressUpdate(word_id=apple.id, semester_id=semester.id, state='review', interval=3),
    ])

    assert saved == 1
    row = UserProgress.query.filter_by(user_id=user.id).one()
    assert row.state == 'review'
    assert row.interval == 3


def test_ef_is_clamped(client, semester):
    login(client, 'alice')
    client.post('/api/progress', json={'progress': [
        {'wordId': _apple().id, 'semesterId': semester.id, 'state': 'review', 'ef': 99},
    ]})
    assert UserProgress.query.one().ef == 25


def test_invalid_progress_body(client):
    login(client, 'alice')
    response = client.post('/api/progress', json={'progress': [{'state': 'review'}]})
    assert response.status_code == 400
    assert response.get_json()['code'] == 'VALIDATION_ERROR'


def test_reset_progress(client, semester):
    login(client, 'alice')
    client.post('/api/progress', json={'progress': [
        {'wordId': _apple().id, 'semesterId': semester.id, 'state': 'review'},
    ]})

    response = client.delete(f'/api/progress?semesterId={semester.id}')
    assert response.get_json()['deleted'] == 1
    assert UserProgress.query.count() == 0


def test_stats_increment(client, semester):
    login(client, 'alice')
    for kind in ('new', 'new', 'review'):
        response = client.post('/api/stats', json={'semesterId': semester.id, 'date': '2024-03-10', 'type': kind})
        assert response.status_code == 200

    assert StudyStats.query.count() == 1
    row = StudyStats.query.one()
    assert row.new_count == 2
    assert row.review_count == 1

    stats = client.get('/api/stats?year=2024').get_json()['stats']
    assert stats[0]['date'] == '2024-03-10'
    assert client.get('/api/stats?year=2023').get_json()['stats'] == []


def test_stats_rejects_bad_kind_and_date(client, semester):
    login(client, 'alice')
    assert client.post('/api/stats', json={'semesterId': semester.id, 'type': 'other'}).status_code == 400
    assert client.post('/api/stats', json={'semesterId': semester.id, 'type': 'new', 'date': '10/03/2024'}).status_code == 400


def test_stats_default_to_today(client, semester):
    login(client, 'alice')
    data = client.post('/api/stats', json={'semesterId': semester.id, 'type': 'review'}).get_json()
    assert len(data['data']['date']) == 10


def test_progress_requires_login(client):
    assert client.get('/api/progress').status_code == 401
