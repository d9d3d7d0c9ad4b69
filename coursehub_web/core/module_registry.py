"""Utilities for declaratively registering application modules.

Each module package exposes a blueprint and an ``init_module(app)`` hook.
The hook runs first so the module can attach its routes, error handlers and
signal receivers before the blueprint is registered.
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

    def load_module(self):
        return import_string(self.import_path)

    def load_blueprint(self) -> Blueprint:
        """Import and return the blueprint described by this definition."""

        blueprint = getattr(self.load_module(), self.attribute, None)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(
                "Expected attribute '%s' in '%s' to be a Flask Blueprint, got %r instead"
                % (self.attribute, self.import_path, type(blueprint))
            )
        return blueprint


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Set up and register all modules in the provided iterable with the Flask app."""

    for module in modules:
        init = getattr(module.load_module(), "init_module", None)
        if init is not None:
            init(app)

        blueprint = module.load_blueprint()
        app.register_blueprint(blueprint, url_prefix=module.url_prefix)
        app.logger.debug(
            "Registered module %s (version %s) at prefix %s",
            module.import_path,
            module.version,
            module.url_prefix or "<root>",
        )


def register_default_modules(app: Flask) -> None:
    """Convenience helper that registers the built-in CourseHub modules."""

    register_modules(app, DEFAULT_MODULES)


DEFAULT_MODULES: Iterable[ModuleDefinition] = (
    ModuleDefinition("coursehub_web.modules.auth", "auth_bp", url_prefix="/auth", version="1.0"),
    ModuleDefinition("coursehub_web.modules.access_control", "blueprint", version="1.0"),
    ModuleDefinition("coursehub_web.modules.dashboard", "dashboard_bp", version="1.0"),
    ModuleDefinition("coursehub_web.modules.courses", "courses_bp", version="1.0"),
    ModuleDefinition("coursehub_web.modules.quizzes", "quizzes_bp", version="1.0"),
)
