# File: studymate_app/modules/auth/__init__.py
from flask import Blueprint

auth_bp = Blueprint('auth', __name__)


def setup_module(app):
    from . import routes  # noqa: F401
