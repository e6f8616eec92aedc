"""Utilities for declaratively registering application modules.

Each blueprint-backed feature module is described by a ``ModuleDefinition``
so registration stays a data table instead of a list of imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from flask import Blueprint, Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    """Describe how a blueprint-backed module is registered with the app."""

    import_path: str
    attribute: str
    url_prefix: Optional[str] = None
    version: str = "1.0"

    def load_blueprint(self) -> Blueprint:
        """Import and return the blueprint described by this definition."""

        module = import_string(self.import_path)
        blueprint = getattr(module, self.attribute, None)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(
                "Expected attribute '%s' in '%s' to be a Flask Blueprint, got %r instead"
                % (self.attribute, self.import_path, type(blueprint))
            )
        return blueprint

    def setup(self, app: Flask) -> None:
        """Run the module's ``setup_module`` hook, which attaches its routes."""

        hook = getattr(import_string(self.import_path), "setup_module", None)
        if callable(hook):
            hook(app)


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Register all modules in the provided iterable with the Flask app."""

    for module in modules:
        blueprint = module.load_blueprint()
        module.setup(app)
        app.register_blueprint(blueprint, url_prefix=module.url_prefix)
        app.logger.debug(
            "Registered module %s (version %s) at prefix %s",
            module.import_path,
            module.version,
            module.url_prefix or "<root>",
        )


def register_default_modules(app: Flask) -> None:
    """Register the built-in StudyMate modules."""

    register_modules(app, DEFAULT_MODULES)


DEFAULT_MODULES: Iterable[ModuleDefinition] = (
    ModuleDefinition("studymate_app.modules.landing", "landing_bp", version="1.0"),
    ModuleDefinition("studymate_app.modules.auth", "auth_bp", url_prefix="/auth", version="1.1"),
    ModuleDefinition("studymate_app.modules.dashboard", "dashboard_bp", version="1.0"),
    ModuleDefinition("studymate_app.modules.study_modules", "study_modules_bp", url_prefix="/modules", version="1.0"),
    ModuleDefinition("studymate_app.modules.notes", "notes_bp", url_prefix="/notes", version="2.0"),
    ModuleDefinition("studymate_app.modules.flashcards", "flashcards_bp", url_prefix="/flashcards", version="1.0"),
    ModuleDefinition("studymate_app.modules.study_timer", "study_timer_bp", url_prefix="/timer", version="1.0"),
    ModuleDefinition("studymate_app.modules.user_profile", "user_profile_bp", url_prefix="/profile", version="1.0"),
    ModuleDefinition("studymate_app.modules.collab", "collab_bp", version="1.0"),
    ModuleDefinition("studymate_app.modules.activity", "activity_bp", version="1.0"),
)
