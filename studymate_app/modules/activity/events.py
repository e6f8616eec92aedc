"""
Event Handlers for Activity Module.

Listens to account, content and study signals and records them in the
activity log. A failure here is logged and never reaches the request that
emitted the signal.
"""
from flask import current_app

from studymate_app.core.extensions import db
from studymate_app.core.signals import (
    content_created,
    content_deleted,
    content_updated,
    flashcard_reviewed,
    note_shared,
    password_reset_completed,
    profile_updated,
    study_session_completed,
    user_logged_in,
    user_registered,
)

from .services import ActivityService


def _record(user_id, action, entity_type=None, entity_id=None, details=None):
    if not user_id:
        return
    try:
        ActivityService.log_activity(user_id, action, entity_type, entity_id, details)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"[Activity] Error recording {action}: {e}", exc_info=True)


@user_registered.connect
def on_user_registered(sender, **kwargs):
    user = kwargs.get('user')
    _record(getattr(user, 'user_id', None), 'register', 'user', getattr(user, 'user_id', None))


@user_logged_in.connect
def on_user_logged_in(sender, **kwargs):
    user = kwargs.get('user')
    _record(getattr(user, 'user_id', None), 'login', 'user', getattr(user, 'user_id', None))


@password_reset_completed.connect
def on_password_reset_completed(sender, **kwargs):
    user = kwargs.get('user')
    _record(getattr(user, 'user_id', None), 'password_reset', 'user', getattr(user, 'user_id', None))


@profile_updated.connect
def on_profile_updated(sender, **kwargs):
    user = kwargs.get('user')
    changes = kwargs.get('changes') or []
    _record(getattr(user, 'user_id', None), 'profile_update', 'user', getattr(user, 'user_id', None),
            ', '.join(changes) or None)


@content_created.connect
def on_content_created(sender, **kwargs):
    _record(kwargs.get('user_id'), 'create', kwargs.get('entity_type'), kwargs.get('entity_id'), kwargs.get('title'))


@content_updated.connect
def on_content_updated(sender, **kwargs):
    _record(kwargs.get('user_id'), 'update', kwargs.get('entity_type'), kwargs.get('entity_id'), kwargs.get('title'))


@content_deleted.connect
def on_content_deleted(sender, **kwargs):
    _record(kwargs.get('user_id'), 'delete', kwargs.get('entity_type'), kwargs.get('entity_id'), kwargs.get('title'))


@note_shared.connect
def on_note_shared(sender, **kwargs):
    _record(kwargs.get('user_id'), 'share', 'note', kwargs.get('note_id'),
            f"{kwargs.get('permission', 'view')} access")


@flashcard_reviewed.connect
def on_flashcard_reviewed(sender, **kwargs):
    _record(kwargs.get('user_id'), 'review', 'flashcard', kwargs.get('flashcard_id'),
            'correct' if kwargs.get('correct') else 'incorrect')


@study_session_completed.connect
def on_study_session_completed(sender, **kwargs):
    _record(kwargs.get('user_id'), 'study', kwargs.get('session_type', 'pomodoro'), kwargs.get('session_id'),
            f"{kwargs.get('duration_minutes', 0)} minutes")
