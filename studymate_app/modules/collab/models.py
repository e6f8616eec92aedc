# File: studymate_app/modules/collab/models.py
# Study groups and note sharing between users.

from __future__ import annotations

import secrets

from studymate_app.core.extensions import db
from studymate_app.utils.time_utils import utcnow


def generate_invite_code() -> str:
    return secrets.token_urlsafe(6)[:8].upper()


class StudyGroup(db.Model):
    __tablename__ = 'study_groups'

    group_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    invite_code = db.Column(db.String(16), unique=True, nullable=False, default=generate_invite_code)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    owner = db.relationship('User', foreign_keys=[owner_id])
    members = db.relationship('StudyGroupMember', backref='group', cascade='all, delete-orphan',
                              order_by='StudyGroupMember.joined_at')

    def membership_for(self, user_id):
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None

    def __repr__(self):
        return f'<StudyGroup {self.group_id} {self.name}>'


class StudyGroupMember(db.Model):
    __tablename__ = 'study_group_members'
    __table_args__ = (
        db.UniqueConstraint('group_id', 'user_id', name='uq_group_member'),
    )

    ROLE_OWNER = 'owner'
    ROLE_MEMBER = 'member'

    member_id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.Integer, db.ForeignKey('study_groups.group_id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    role = db.Column(db.String(20), default=ROLE_MEMBER, nullable=False)
    joined_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    user = db.relationship('User')


class SharedNote(db.Model):
    __tablename__ = 'shared_notes'
    __table_args__ = (
        db.UniqueConstraint('note_id', 'shared_with', name='uq_shared_note_recipient'),
    )

    PERMISSION_VIEW = 'view'
    PERMISSION_EDIT = 'edit'
    PERMISSIONS = (PERMISSION_VIEW, PERMISSION_EDIT)

    share_id = db.Column(db.Integer, primary_key=True)
    note_id = db.Column(db.Integer, db.ForeignKey('notes.note_id', ondelete='CASCADE'), nullable=False, index=True)
    shared_by = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False)
    shared_with = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    permission = db.Column(db.String(10), default=PERMISSION_VIEW, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    sharer = db.relationship('User', foreign_keys=[shared_by])
    recipient = db.relationship('User', foreign_keys=[shared_with])

    @property
    def can_edit(self) -> bool:
        return self.permission == self.PERMISSION_EDIT
