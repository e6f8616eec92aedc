# File: studymate_app/modules/activity/__init__.py
# Per-user activity feed, fed by signal listeners in events.py.
from flask import Blueprint

activity_bp = Blueprint('activity', __name__)


def setup_module(app):
    from . import events, routes  # noqa: F401
