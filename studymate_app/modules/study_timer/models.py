from __future__ import annotations

from studymate_app.core.extensions import db
from studymate_app.utils.time_utils import utcnow


class StudySession(db.Model):
    __tablename__ = 'study_sessions'

    TYPE_POMODORO = 'pomodoro'
    TYPE_SHORT_BREAK = 'short_break'
    TYPE_LONG_BREAK = 'long_break'
    TYPE_MANUAL = 'manual'
    TYPES = (TYPE_POMODORO, TYPE_SHORT_BREAK, TYPE_LONG_BREAK, TYPE_MANUAL)

    session_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    module_id = db.Column(db.Integer, db.ForeignKey('modules.module_id', ondelete='SET NULL'), nullable=True)
    session_type = db.Column(db.String(20), default=TYPE_POMODORO, nullable=False)
    duration_minutes = db.Column(db.Integer, nullable=False)
    completed = db.Column(db.Boolean, default=True, nullable=False)
    started_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)

    def __repr__(self):
        return f'<StudySession {self.session_id} {self.session_type} {self.duration_minutes}m>'
