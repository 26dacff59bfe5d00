import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from vocabdrill_app import create_app, db
from vocabdrill_app.config import Config
from vocabdrill_app.models import Semester, VocabWord


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    WTF_CSRF_ENABLED = False
    LOG_TO_FILE = False
    LOG_JSON = False
    SEED_SAMPLE_DATA = False
    STUDY_DAY_ROLLOVER_HOUR = 0
    STUDY_TIMEZONE = 'UTC'


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, password=None):
    payload = {'username': username}
    if password is not None:
        payload['password'] = password
    return client.post('/api/user', json=payload)


@pytest.fixture
def admin_client(client):
    response = login(client, 'admin', 'admin')
    assert response.status_code == 200
    return client


@pytest.fixture
def semester(app):
    """One semester holding apple, book and cat."""
    semester = Semester(name='Unit 1', slug='unit-1', order=1)
    db.session.add(semester)
    db.session.flush()
    for order, (word, meaning) in enumerate([
        ('apple', 'n. 苹果'),
        ('book', 'n. 书'),
        ('cat', 'n. 猫'),
    ]):
        db.session.add(VocabWord(semester_id=semester.id, word=word, meaning=meaning, order=order))
    db.session.commit()
    return semester
