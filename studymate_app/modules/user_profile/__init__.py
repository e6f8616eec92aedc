# File: studymate_app/modules/user_profile/__init__.py
from flask import Blueprint

user_profile_bp = Blueprint('user_profile', __name__)


def setup_module(app):
    from . import routes  # noqa: F401
