# File: studymate_app/modules/dashboard/__init__.py
from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__)


def setup_module(app):
    from . import routes  # noqa: F401
