# File: vocabdrill_app/modules/stats/__init__.py
from flask import Blueprint

stats_bp = Blueprint('stats', __name__)

module_metadata = {
    'name': 'Dashboard',
    'category': 'Analytics',
    'url_prefix': '/api',
    'enabled': True
}

from . import routes  # noqa: E402,F401
