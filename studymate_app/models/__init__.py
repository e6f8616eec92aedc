"""
Model registry: importing this package registers every table with SQLAlchemy.
Models live beside the module that owns them.
"""
from studymate_app.core.extensions import db

from studymate_app.modules.auth.models import PasswordReset, User
from studymate_app.modules.study_modules.models import DEFAULT_MODULE_COLOR, Module
from studymate_app.modules.notes.models import Note, Tag, note_tags
from studymate_app.modules.flashcards.models import Flashcard
from studymate_app.modules.study_timer.models import StudySession
from studymate_app.modules.collab.models import SharedNote, StudyGroup, StudyGroupMember
from studymate_app.modules.activity.models import ActivityLog

__all__ = [
    'db',
    'User',
    'PasswordReset',
    'Module',
    'DEFAULT_MODULE_COLOR',
    'Note',
    'Tag',
    'note_tags',
    'Flashcard',
    'StudySession',
    'StudyGroup',
    'StudyGroupMember',
    'SharedNote',
    'ActivityLog',
]
