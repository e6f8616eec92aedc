"""
Note Service - CRUD, filtering and archiving of a user's notes.

Reads and writes always filter on ``user_id``; another user's note is
reported as not found.
"""
from flask import current_app
from sqlalchemy import or_

from studymate_app.core.error_handlers import NotFoundError, ValidationError
from studymate_app.core.extensions import db
from studymate_app.core.signals import content_created, content_deleted, content_updated

from ...study_modules.models import Module
from ..models import Note, Tag
from .tag_service import TagService


def _escape_like(value):
    """Make LIKE wildcards in user input match literally."""
    return value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


class NoteService:

    @staticmethod
    def build_notes_query(user_id, module_id=None, tag_id=None, search=None, archived=False):
        """
        Select statement for the notes list, newest edits first.

        Args:
            module_id: only notes in this module.
            tag_id: only notes carrying this tag.
            search: substring matched against title and content.
            archived: list archived notes instead of active ones.
        """
        query = db.select(Note).where(Note.user_id == user_id, Note.is_archived.is_(bool(archived)))
        if module_id:
            query = query.where(Note.module_id == module_id)
        if tag_id:
            query = query.where(Note.tags.any(Tag.tag_id == tag_id))
        search = (search or '').strip()
        if search:
            pattern = '%' + _escape_like(search) + '%'
            query = query.where(or_(
                Note.title.ilike(pattern, escape='\\'),
                Note.content.ilike(pattern, escape='\\'),
            ))
        return query.order_by(Note.updated_at.desc(), Note.note_id.desc())

    @staticmethod
    def list_notes(user_id, **filters):
        return db.session.execute(NoteService.build_notes_query(user_id, **filters)).scalars().all()

    @staticmethod
    def get_owned_note(user_id, note_id):
        note = Note.query.filter_by(note_id=note_id, user_id=user_id).first()
        if note is None:
            raise NotFoundError('Note not found.', redirect_endpoint='notes.index', resource='note')
        return note

    @staticmethod
    def _require_owned_module(user_id, module_id):
        module = Module.query.filter_by(module_id=module_id, user_id=user_id).first()
        if module is None:
            raise ValidationError('Please select a valid module.', redirect_endpoint='notes.index')
        return module

    @staticmethod
    def create_note(user_id, title, content, module_id, tags=None):
        NoteService._require_owned_module(user_id, module_id)
        note = Note(user_id=user_id, module_id=module_id, title=title.strip(), content=content or '')
        db.session.add(note)
        TagService.sync_note_tags(note, tags)
        db.session.commit()
        content_created.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='note', entity_id=note.note_id, title=note.title)
        return note

    @staticmethod
    def update_note(user_id, note_id, title, content, module_id, tags=None):
        note = NoteService.get_owned_note(user_id, note_id)
        NoteService._require_owned_module(user_id, module_id)
        note.title = title.strip()
        note.content = content or ''
        note.module_id = module_id
        TagService.sync_note_tags(note, tags)
        db.session.commit()
        content_updated.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='note', entity_id=note.note_id, title=note.title)
        return note

    @staticmethod
    def delete_note(user_id, note_id):
        note = NoteService.get_owned_note(user_id, note_id)
        title = note.title
        db.session.delete(note)
        db.session.commit()
        content_deleted.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='note', entity_id=note_id, title=title)

    @staticmethod
    def toggle_archive(user_id, note_id):
        note = NoteService.get_owned_note(user_id, note_id)
        note.is_archived = not note.is_archived
        db.session.commit()
        current_app.logger.debug(f"Note {note_id} archived={note.is_archived}")
        return note
