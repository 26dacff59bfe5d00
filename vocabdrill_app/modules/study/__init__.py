# File: vocabdrill_app/modules/study/__init__.py
from flask import Blueprint

study_bp = Blueprint('study', __name__)

module_metadata = {
    'name': 'Study session',
    'category': 'Learning',
    'url_prefix': '/api/study',
    'enabled': True
}

from . import routes  # noqa: E402,F401
