# File: vocabdrill_app/modules/progress/__init__.py
from flask import Blueprint

progress_bp = Blueprint('progress', __name__)

module_metadata = {
    'name': 'Progress & stats',
    'category': 'Core',
    'url_prefix': '/api',
    'enabled': True
}

from . import routes  # noqa: E402,F401
