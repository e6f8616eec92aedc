# File: studymate_app/modules/study_modules/__init__.py
# Subject modules: the user-defined folders that group notes and flashcards.
from flask import Blueprint

study_modules_bp = Blueprint('study_modules', __name__)


def setup_module(app):
    from . import routes  # noqa: F401
