"""
Module Service - CRUD over a user's subject modules.

Every lookup filters on ``user_id``: a module that belongs to someone else
is reported exactly like a missing one.
"""
from flask import current_app
from sqlalchemy import func

from studymate_app.core.error_handlers import NotFoundError
from studymate_app.core.extensions import db
from studymate_app.core.signals import content_created, content_deleted, content_updated

from ..notes.models import Note
from .models import DEFAULT_MODULE_COLOR, Module


class ModuleService:

    @staticmethod
    def list_modules(user_id):
        return Module.query.filter_by(user_id=user_id).order_by(Module.name.asc()).all()

    @staticmethod
    def list_with_note_counts(user_id):
        """
        Returns:
            list[tuple[Module, int]]: modules ordered by name with their note count.
        """
        rows = db.session.execute(
            db.select(Module, func.count(Note.note_id))
            .outerjoin(Note, Note.module_id == Module.module_id)
            .where(Module.user_id == user_id)
            .group_by(Module.module_id)
            .order_by(Module.name.asc())
        ).all()
        return [(module, count) for module, count in rows]

    @staticmethod
    def get_owned_module(user_id, module_id):
        module = Module.query.filter_by(module_id=module_id, user_id=user_id).first()
        if module is None:
            raise NotFoundError('Module not found.', redirect_endpoint='study_modules.index', resource='module')
        return module

    @staticmethod
    def create_module(user_id, name, color=None, description=None):
        module = Module(
            user_id=user_id,
            name=name.strip(),
            color=color or DEFAULT_MODULE_COLOR,
            description=(description or '').strip() or None,
        )
        db.session.add(module)
        db.session.commit()
        content_created.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='module', entity_id=module.module_id, title=module.name)
        return module

    @staticmethod
    def update_module(user_id, module_id, name, color=None, description=None):
        module = ModuleService.get_owned_module(user_id, module_id)
        module.name = name.strip()
        module.color = color or module.color or DEFAULT_MODULE_COLOR
        module.description = (description or '').strip() or None
        db.session.commit()
        content_updated.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='module', entity_id=module.module_id, title=module.name)
        return module

    @staticmethod
    def delete_module(user_id, module_id):
        """Delete a module together with its notes and flashcards."""
        module = ModuleService.get_owned_module(user_id, module_id)
        name = module.name
        db.session.delete(module)
        db.session.commit()
        current_app.logger.info(f"User {user_id} deleted module {module_id} and its contents")
        content_deleted.send(current_app._get_current_object(), user_id=user_id,
                             entity_type='module', entity_id=module_id, title=name)
