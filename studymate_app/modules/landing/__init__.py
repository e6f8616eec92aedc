# File: studymate_app/modules/landing/__init__.py
from flask import Blueprint

landing_bp = Blueprint('landing', __name__)


def setup_module(app):
    from . import routes  # noqa: F401
