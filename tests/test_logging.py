import logging
import logging.handlers

from vocabdrill_app import create_app, db
from vocabdrill_app.core.logging_config import setup_logging

from conftest import TestConfig


class JsonLogConfig(TestConfig):
    LOG_JSON = True


def _formats():
    return [h.formatter._fmt for h in logging.getLogger('vocabdrill_app').handlers]


def test_plain_format_by_default(app):
    formats = _formats()
    assert formats
    assert all(f.startswith('%(asctime)s [') for f in formats)


def test_log_json_switches_package_logger_to_json():
    app = create_app(JsonLogConfig)
    with app.app_context():
        formats = _formats()
        assert formats
        assert all(f.startswith('{"time"') for f in formats)
        db.session.remove()
        db.drop_all()


def test_file_handler_uses_same_format(tmp_path):
    logger = setup_logging(log_dir=str(tmp_path), json_format=True, log_to_file=True)
    try:
        handlers = logger.handlers
        assert len(handlers) == 2
        assert isinstance(handlers[1], logging.handlers.RotatingFileHandler)
        assert handlers[1].formatter._fmt == handlers[0].formatter._fmt
        assert (tmp_path / 'vocabdrill.log').exists()
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
