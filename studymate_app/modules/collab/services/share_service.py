"""
Share Service - note sharing between users.

Only a note's owner can share it or revoke a share. Recipients see the
note through their ``SharedNote`` row; ``edit`` permission lets them
change title and content.
"""
from flask import current_app

from studymate_app.core.error_handlers import AuthorizationError, NotFoundError, ValidationError
from studymate_app.core.extensions import db
from studymate_app.core.signals import content_updated, note_shared

from ...auth.services import AuthService
from ...notes.services import NoteService
from ..models import SharedNote


class ShareService:

    @staticmethod
    def share_note(owner_id, note_id, recipient_identifier, permission=SharedNote.PERMISSION_VIEW):
        """
        Share an owned note, or update the permission of an existing share.

        Raises:
            NotFoundError: the note is not the caller's.
            ValidationError: unknown recipient, sharing with oneself, bad permission.
        """
        note = NoteService.get_owned_note(owner_id, note_id)
        if permission not in SharedNote.PERMISSIONS:
            raise ValidationError('Invalid permission.', redirect_endpoint='notes.index')

        recipient = AuthService.find_by_identifier(recipient_identifier)
        if recipient is None:
            raise ValidationError('No user found with that username or email.', redirect_endpoint='notes.index')
        if recipient.user_id == owner_id:
            raise ValidationError('You cannot share a note with yourself.', redirect_endpoint='notes.index')

        share = SharedNote.query.filter_by(note_id=note.note_id, shared_with=recipient.user_id).first()
        if share is None:
            share = SharedNote(note_id=note.note_id, shared_by=owner_id, shared_with=recipient.user_id)
            db.session.add(share)
        share.permission = permission
        db.session.commit()

        note_shared.send(current_app._get_current_object(), user_id=owner_id, note_id=note.note_id,
                         shared_with_id=recipient.user_id, permission=permission)
        return share

    @staticmethod
    def list_shares_for_note(owner_id, note_id):
        note = NoteService.get_owned_note(owner_id, note_id)
        return SharedNote.query.filter_by(note_id=note.note_id).order_by(SharedNote.created_at.asc()).all()

    @staticmethod
    def revoke_share(owner_id, share_id):
        share = SharedNote.query.filter_by(share_id=share_id, shared_by=owner_id).first()
        if share is None:
            raise NotFoundError('Share not found.', redirect_endpoint='notes.index', resource='share')
        note_id = share.note_id
        db.session.delete(share)
        db.session.commit()
        return note_id

    @staticmethod
    def list_shared_with(user_id):
        return (
            SharedNote.query.filter_by(shared_with=user_id)
            .order_by(SharedNote.created_at.desc())
            .all()
        )

    @staticmethod
    def get_share_for_recipient(user_id, share_id):
        share = SharedNote.query.filter_by(share_id=share_id, shared_with=user_id).first()
        if share is None:
            raise NotFoundError('Shared note not found.', redirect_endpoint='collab.shared', resource='share')
        return share

    @staticmethod
    def update_shared_note(user_id, share_id, title, content):
        share = ShareService.get_share_for_recipient(user_id, share_id)
        if not share.can_edit:
            raise AuthorizationError('You only have view access to this note.', redirect_endpoint='collab.shared')
        note = share.note
        note.title = title.strip()
        note.content = content or ''
        db.session.commit()
        content_updated.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='shared_note', entity_id=note.note_id, title=note.title)
        return note
