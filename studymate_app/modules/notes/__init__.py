# File: studymate_app/modules/notes/__init__.py
from flask import Blueprint

notes_bp = Blueprint('notes', __name__)


def setup_module(app):
    from . import routes  # noqa: F401
