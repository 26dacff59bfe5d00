# File: vocabdrill_app/modules/vocabulary/__init__.py
from flask import Blueprint

vocabulary_bp = Blueprint('vocabulary', __name__)

module_metadata = {
    'name': 'Vocabulary',
    'category': 'Content',
    'url_prefix': '/api',
    'enabled': True
}

from . import routes  # noqa: E402,F401
