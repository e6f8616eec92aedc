# File: studymate_app/modules/flashcards/__init__.py
from flask import Blueprint

flashcards_bp = Blueprint('flashcards', __name__)


def setup_module(app):
    from . import routes  # noqa: F401
