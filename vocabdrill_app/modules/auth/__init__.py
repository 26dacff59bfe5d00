# File: vocabdrill_app/modules/auth/__init__.py
from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

module_metadata = {
    'name': 'Accounts',
    'category': 'System',
    'url_prefix': '/api',
    'enabled': True
}

from . import routes  # noqa: E402,F401
