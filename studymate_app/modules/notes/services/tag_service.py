"""Tag Service - per-user tags and their links to notes."""
from flask import current_app

from studymate_app.core.error_handlers import NotFoundError
from studymate_app.core.extensions import db
from studymate_app.core.signals import content_deleted

from ..models import Tag

MAX_TAG_LENGTH = 50


class TagService:

    @staticmethod
    def parse_tag_input(raw):
        """
        Split a comma-separated tag string.

        Blank entries are dropped, names are trimmed to 50 characters and
        duplicates (case-insensitive) keep their first spelling.
        """
        names = []
        seen = set()
        for part in (raw or '').split(','):
            name = part.strip()[:MAX_TAG_LENGTH].strip()
            if not name or name.lower() in seen:
                continue
            seen.add(name.lower())
            names.append(name)
        return names

    @staticmethod
    def list_tags(user_id):
        return Tag.query.filter_by(user_id=user_id).order_by(Tag.name.asc()).all()

    @staticmethod
    def get_or_create(user_id, name):
        tag = Tag.query.filter(Tag.user_id == user_id, db.func.lower(Tag.name) == name.lower()).first()
        if tag is None:
            tag = Tag(user_id=user_id, name=name)
            db.session.add(tag)
        return tag

    @staticmethod
    def sync_note_tags(note, raw):
        """Replace the note's tags with those named in ``raw``. Caller commits."""
        note.tags = [TagService.get_or_create(note.user_id, name) for name in TagService.parse_tag_input(raw)]

    @staticmethod
    def delete_tag(user_id, tag_id):
        tag = Tag.query.filter_by(tag_id=tag_id, user_id=user_id).first()
        if tag is None:
            raise NotFoundError('Tag not found.', redirect_endpoint='notes.index', resource='tag')
        name = tag.name
        db.session.delete(tag)
        db.session.commit()
        content_deleted.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='tag', entity_id=tag_id, title=name)
