from __future__ import annotations

from studymate_app.core.extensions import db
from studymate_app.utils.time_utils import utcnow


class ActivityLog(db.Model):
    """Append-only feed of what a user did, written by signal listeners."""
    __tablename__ = 'activity_log'

    activity_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    action = db.Column(db.String(50), nullable=False)
    entity_type = db.Column(db.String(50), nullable=True)
    entity_id = db.Column(db.Integer, nullable=True)
    details = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)

    def __repr__(self):
        return f'<ActivityLog {self.user_id} {self.action}>'
