"""Subject module model: the folder notes and flashcards live in."""

from __future__ import annotations

from studymate_app.core.extensions import db
from studymate_app.utils.time_utils import utcnow

DEFAULT_MODULE_COLOR = '#3B82F6'


class Module(db.Model):
    __tablename__ = 'modules'

    module_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    color = db.Column(db.String(7), default=DEFAULT_MODULE_COLOR, nullable=False)
    description = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    # Deleting a module deletes its notes and flashcards
    notes = db.relationship('Note', backref='module', cascade='all, delete-orphan')
    flashcards = db.relationship('Flashcard', backref='module', cascade='all, delete-orphan')
    # Study time survives module deletion, detached from the module
    study_sessions = db.relationship('StudySession', backref='module', lazy='dynamic')

    def __repr__(self):
        return f'<Module {self.module_id} {self.name}>'
