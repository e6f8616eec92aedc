# File: studymate_app/modules/study_timer/__init__.py
# Pomodoro timer page and study session log.
from flask import Blueprint

study_timer_bp = Blueprint('study_timer', __name__)


def setup_module(app):
    from . import routes  # noqa: F401
