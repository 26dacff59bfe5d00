"""
Centralized Logging Configuration for vocabdrill

Provides consistent logging setup across the application with:
- Human-readable format for development
- Optional structured JSON format
- File rotation for log management
"""

import os
import logging
import logging.handlers
from typing import Optional


def setup_logging(
    app=None,
    log_level: str = 'INFO',
    log_dir: Optional[str] = None,
    json_format: bool = False,
    log_to_file: bool = True
) -> logging.Logger:
    """
    Configure the ``vocabdrill_app`` package logger.

    Args:
        app: Flask application instance (optional)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files (default: logs/ at the project root)
        json_format: Use JSON format for structured logging
        log_to_file: Also write to a rotating file under ``log_dir``

    Returns:
        Configured logger instance
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    logger = logging.getLogger('vocabdrill_app')
    logger.setLevel(level)
    logger.handlers.clear()

    if json_format:
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(module)s", "message": "%(message)s"}'
    else:
        format_str = '%(asctime)s [%(levelname)s] %(module)s: %(message)s'

    formatter = logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_to_file:
        if log_dir is None:
            base_dir = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
            log_dir = os.path.join(base_dir, 'logs')
        os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, 'vocabdrill.log'),
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if app:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)

    logger.info("Logging initialized: level=%s, file=%s", log_level, log_dir if log_to_file else None)

    return logger
