"""Activity Service - writes and reads the per-user activity log."""
from flask import current_app

from studymate_app.core.extensions import db

from .models import ActivityLog

ACTION_LABELS = {
    'register': 'Joined',
    'login': 'Logged in',
    'create': 'Created',
    'update': 'Updated',
    'delete': 'Deleted',
    'share': 'Shared',
    'review': 'Reviewed',
    'study': 'Studied',
    'password_reset': 'Reset password',
    'profile_update': 'Updated profile',
}


class ActivityService:

    @staticmethod
    def log_activity(user_id, action, entity_type=None, entity_id=None, details=None):
        entry = ActivityLog(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
        )
        db.session.add(entry)
        db.session.commit()
        current_app.logger.debug(f"[Activity] {user_id} {action} {entity_type}:{entity_id}")
        return entry

    @staticmethod
    def build_feed_query(user_id):
        return (
            db.select(ActivityLog)
            .where(ActivityLog.user_id == user_id)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.activity_id.desc())
        )

    @staticmethod
    def describe(entry):
        """Human-readable one-liner for the feed."""
        label = ACTION_LABELS.get(entry.action, entry.action.replace('_', ' ').capitalize())
        parts = [label]
        if entry.entity_type:
            parts.append(entry.entity_type.replace('_', ' '))
        if entry.details:
            parts.append(f'"{entry.details}"')
        return ' '.join(parts)
