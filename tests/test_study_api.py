"""End-to-end study sessions through the HTTP API."""

from datetime import timedelta

from vocabdrill_app import db
from vocabdrill_app.models import StudySessionState, StudyStats, User, UserProgress, VocabWord
from vocabdrill_app.utils.time_utils import ensure_utc, format_date, study_day_start, study_today

from conftest import login

MEANINGS = {'apple': 'n. 苹果', 'book': 'n. 书', 'cat': 'n. 猫'}
WORDS = {meaning: word for word, meaning in MEANINGS.items()}


def start(client, semester, **extra):
    body = {'semesterIds': [semester.id]}
    body.update(extra)
    return client.post('/api/study/start', json=body)


def answer_current(client, view):
    """Answer whatever is on screen correctly."""
    mode = view['mode']
    if mode == 'learn':
        return client.post('/api/study/learn').get_json()
    if mode == 'quiz':
        return client.post('/api/study/quiz', json={'choice': MEANINGS[view['word']['word']]}).get_json()
    return client.post('/api/study/spell', json={'answer': WORDS[view['word']['meaning']]}).get_json()


def test_study_one_new_word(client, semester):
    login(client, 'alice')

    view = start(client, semester, dailyLimit=1).get_json()
    assert view['active'] is True
    assert view['mode'] == 'learn'
    assert view['word']['word'] == 'apple'
    assert view['word']['meaning'] == 'n. 苹果'
    assert view['progress'] == {'total': 1, 'completed': 0, 'queue': 1}

    view = client.post('/api/study/learn').get_json()
    assert view['mode'] == 'quiz'
    assert 'meaning' not in view['word']
    assert 'n. 苹果' in view['options']
    assert len(view['options']) == 3

    view = client.post('/api/study/quiz', json={'choice': 'n. 苹果'}).get_json()
    assert view['waiting'] is True
    assert view['result']['correct'] is True
    assert 'apple' in view['pronunciation']

    view = client.post('/api/study/next').get_json()
    assert view['mode'] == 'spell'
    assert 'word' not in view['word']

    view = client.post('/api/study/spell', json={'answer': 'Apple'}).get_json()
    assert view['result']['correct'] is True
    assert view['result']['completed'] is True
    assert view['progress']['completed'] == 1

    view = client.post('/api/study/next').get_json()
    assert view['finished'] is True
    assert view['completed_words'] == 1

    user = User.query.filter_by(username='alice').first()
    row = UserProgress.query.filter_by(user_id=user.id).one()
    today = study_today()
    assert row.state == 'review'
    assert row.interval == 3
    assert row.ef == 25
    assert row.failure_count == 0
    assert ensure_utc(row.next_review) == study_day_start(today + timedelta(days=3))

    stats = StudyStats.query.filter_by(user_id=user.id).one()
    assert stats.date == format_date(today)
    assert stats.new_count == 1
    assert stats.review_count == 0

    assert db.session.get(StudySessionState, user.id) is None
    assert client.get('/api/study/current').get_json()['active'] is False


def test_failure_is_saved_on_exit(client, semester):
    login(client, 'bob')
    start(client, semester, dailyLimit=1)
    client.post('/api/study/learn')

    view = client.post('/api/study/quiz', json={'choice': 'wrong'}).get_json()
    assert view['result']['correct'] is False
    assert view['result']['correct_answer'] == 'n. 苹果'
    assert 'pronunciation' not in view

    # buffered, not yet written
    assert UserProgress.query.count() == 0

    exited = client.post('/api/study/exit').get_json()
    assert exited['exited'] is True
    assert exited['flushed'] == 1

    row = UserProgress.query.one()
    assert row.state == 'learning'
    assert row.interval == 1
    assert row.ef == 23
    assert row.failure_count == 1
    assert StudyStats.query.count() == 0


def test_session_survives_between_requests(client, semester):
    login(client, 'carol')
    first = start(client, semester).get_json()

    current = client.get('/api/study/current').get_json()
    assert current['active'] is True
    assert current['word']['id'] == first['word']['id']
    assert current['mode'] == first['mode']


def test_whole_semester_completes(client, semester):
    login(client, 'dave')
    view = start(client, semester).get_json()
    assert view['progress']['total'] == 3

    for _ in range(50):
        if view['finished']:
            break
        view = answer_current(client, view)
        if view.get('waiting'):
            view = client.post('/api/study/next').get_json()

    assert view['finished'] is True
    user = User.query.filter_by(username='dave').first()
    assert UserProgress.query.filter_by(user_id=user.id, state='review').count() == 3
    assert StudyStats.query.filter_by(user_id=user.id).one().new_count == 3


def test_nothing_to_study(client, semester):
    login(client, 'erin')
    data = start(client, semester, dailyLimit=0).get_json()
    assert data['success'] is True
    assert data['empty'] is True
    assert data['finished'] is True


def test_extra_session_without_learned_words_is_empty(client, semester):
    login(client, 'erin')
    assert start(client, semester, kind='extra').get_json()['empty'] is True


def test_empty_selection_is_rejected(client, semester):
    login(client, 'frank')
    response = client.post('/api/study/start', json={'semesterIds': []})
    assert response.status_code == 400


def test_out_of_order_event(client, semester):
    login(client, 'grace')
    start(client, semester, dailyLimit=1)
    response = client.post('/api/study/spell', json={'answer': 'apple'})
    assert response.status_code == 409
    assert response.get_json()['code'] == 'CONFLICT'


def test_event_without_session(client, semester):
    login(client, 'heidi')
    assert client.post('/api/study/learn').status_code == 404


def test_review_words_start_with_quiz(client, semester):
    login(client, 'ivan')
    user = User.query.filter_by(username='ivan').first()
    for word in VocabWord.query.all():
        db.session.add(UserProgress(
            user_id=user.id, word_id=word.id, semester_id=semester.id, state='review',
            ef=25, interval=3, next_review=study_day_start(study_today()),
        ))
    db.session.commit()

    view = start(client, semester, dailyLimit=0).get_json()
    assert view['progress']['total'] == 3
    assert view['mode'] == 'quiz'

    view = answer_current(client, view)
    view = client.post('/api/study/next').get_json()
    assert view['mode'] in ('quiz', 'spell')


def test_study_requires_login(client):
    assert client.post('/api/study/start', json={'semesterIds': [1]}).status_code == 401
