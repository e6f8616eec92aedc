# File: studymate_app/modules/collab/__init__.py
# Study groups and note sharing.
from flask import Blueprint

collab_bp = Blueprint('collab', __name__)


def setup_module(app):
    from . import routes  # noqa: F401
