"""Note and Tag models."""

from __future__ import annotations

from studymate_app.core.extensions import db
from studymate_app.utils.time_utils import utcnow

note_tags = db.Table(
    'note_tags',
    db.Column('note_id', db.Integer, db.ForeignKey('notes.note_id', ondelete='CASCADE'), primary_key=True),
    db.Column('tag_id', db.Integer, db.ForeignKey('tags.tag_id', ondelete='CASCADE'), primary_key=True),
)


class Note(db.Model):
    __tablename__ = 'notes'

    note_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    module_id = db.Column(db.Integer, db.ForeignKey('modules.module_id', ondelete='CASCADE'), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False, default='')
    is_archived = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)

    tags = db.relationship('Tag', secondary=note_tags, backref='notes',
                           order_by='Tag.name')
    shares = db.relationship('SharedNote', backref='note', cascade='all, delete-orphan')

    @property
    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags]

    def __repr__(self):
        return f'<Note {self.note_id} {self.title!r}>'


class Tag(db.Model):
    __tablename__ = 'tags'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'name', name='uq_tags_user_name'),
    )

    tag_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(50), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f'<Tag {self.name}>'
