# File: vocabdrill_app/config.py
# Application configuration read from the environment (.env supported).

import os

from dotenv import load_dotenv

load_dotenv()

# vocabdrill_app/ sits one level below the project root
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATABASE_PATH = os.path.join(BASE_DIR, "database", "vocabdrill.db")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """Configuration for the vocabdrill Flask app."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Development fallback, set SECRET_KEY in production
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {'timeout': 30},
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    DEFAULT_ADMIN_USERNAME = os.environ.get('DEFAULT_ADMIN_USERNAME', 'admin')
    DEFAULT_ADMIN_PASSWORD = os.environ.get('DEFAULT_ADMIN_PASSWORD', 'admin')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    LOG_TO_FILE = os.environ.get('LOG_TO_FILE', '1') not in ('0', 'false', 'False')
    LOG_JSON = os.environ.get('LOG_JSON', '0') in ('1', 'true', 'True')

    # Study scheduling
    DAILY_NEW_LIMIT = _env_int('DAILY_NEW_LIMIT', 20)
    EXTRA_SESSION_SIZE = _env_int('EXTRA_SESSION_SIZE', 20)
    QUEUE_WINDOW = _env_int('QUEUE_WINDOW', 30)
    PROGRESS_FLUSH_EVERY = _env_int('PROGRESS_FLUSH_EVERY', 5)
    HARD_WORD_FAILURES = _env_int('HARD_WORD_FAILURES', 3)

    # Hour of day (local to STUDY_TIMEZONE) at which the study day rolls over.
    # 0 keeps the plain midnight boundary.
    STUDY_DAY_ROLLOVER_HOUR = _env_int('STUDY_DAY_ROLLOVER_HOUR', 0)
    STUDY_TIMEZONE = os.environ.get('STUDY_TIMEZONE', 'UTC')

    PRONUNCIATION_URL = os.environ.get(
        'PRONUNCIATION_URL',
        'https://dict.youdao.com/dictvoice?audio={word}&type=2',
    )

    # Seed the sample semesters on an empty database
    SEED_SAMPLE_DATA = os.environ.get('SEED_SAMPLE_DATA', '1') not in ('0', 'false', 'False')

    @classmethod
    def init_app(cls, app):
        """Create the directories the app writes to."""
        if app.config['SQLALCHEMY_DATABASE_URI'] == f'sqlite:///{DATABASE_PATH}':
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
        if app.config.get('LOG_TO_FILE'):
            os.makedirs(app.config['LOG_DIR'], exist_ok=True)
