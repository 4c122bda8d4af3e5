"""Jinja2 template rendering for the Express boilerplates.

Templates live under ``api_gen/scaffolder/templates/`` in layers: ``common/``
is rendered for every kind and ``auth/`` is added for the auth kind. Shared
templates switch on ``auth_required`` instead of being patched after the
fact.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape


# ---------------------------------------------------------------------------
# Template kinds
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateKind(str, Enum):
    BASIC = "basic"
    AUTH = "auth"

    @property
    def description(self) -> str:
        return TEMPLATE_DESCRIPTIONS[self]

    @property
    def layers(self) -> list[str]:
        if self is TemplateKind.AUTH:
            return ["common", "auth"]
        return ["common"]


TEMPLATE_DESCRIPTIONS: dict[TemplateKind, str] = {
    TemplateKind.BASIC: "Basic REST API with CRUD operations",
    TemplateKind.AUTH: "API with authentication system",
}

# Project skeleton; some stay empty until the user fills them in.
PROJECT_DIRECTORIES: list[str] = [
    "src/controllers",
    "src/middleware",
    "src/models",
    "src/routes",
    "src/services",
    "src/utils",
    "tests",
]

# Dotfiles are stored without the leading dot so they ship as package data.
_RENAMES: dict[str, str] = {
    "env.example": ".env.example",
    "gitignore": ".gitignore",
}

_BASE_DEPENDENCIES: dict[str, str] = {
    "express": "^4.18.2",
    "cors": "^2.8.5",
    "helmet": "^7.0.0",
    "morgan": "^1.10.0",
    "dotenv": "^16.0.3",
}

_AUTH_DEPENDENCIES: dict[str, str] = {
    "bcryptjs": "^2.4.3",
    "jsonwebtoken": "^9.0.0",
    "joi": "^17.9.2",
}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the ``.j2`` files of one or more template layers.

    Args:
        template_dir: Root holding the layer directories. Defaults to the
            templates shipped with the package.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template (path relative to the template root)."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_layer(self, layer: str, context: dict[str, Any]) -> dict[str, str]:
        """Render every ``*.j2`` file under *layer*.

        Returns:
            Mapping of output path (relative to the project root, ``.j2``
            stripped, dotfiles restored) to rendered content.
        """
        files: dict[str, str] = {}
        for rel in self.list_templates(layer):
            output_name = Path(rel).relative_to(layer).as_posix()[: -len(".j2")]
            parent, _, name = output_name.rpartition("/")
            name = _RENAMES.get(name, name)
            output_name = f"{parent}/{name}" if parent else name
            files[output_name] = self.render(rel, context)
        return files

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# TemplateProvider
# ---------------------------------------------------------------------------


class TemplateProvider:
    """Maps a template kind and project name to the files of a new project."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def render_files(self, kind: TemplateKind, project_name: str) -> dict[str, str]:
        """Return ``{relative path: content}`` for every generated file."""
        context = {
            "project_name": project_name,
            "description": kind.description,
            "auth_required": kind is TemplateKind.AUTH,
        }
        files: dict[str, str] = {"package.json": _build_package_json(project_name, kind)}
        for layer in kind.layers:
            files.update(self.renderer.render_layer(layer, context))
        return dict(sorted(files.items()))


def _build_package_json(project_name: str, kind: TemplateKind) -> str:
    """Build the generated ``package.json``."""
    dependencies = dict(_BASE_DEPENDENCIES)
    if kind is TemplateKind.AUTH:
        dependencies.update(_AUTH_DEPENDENCIES)

    package = {
        "name": project_name,
        "version": "1.0.0",
        "description": "Generated API boilerplate",
        "main": "src/app.js",
        "scripts": {
            "start": "node src/app.js",
            "dev": "nodemon src/app.js",
            "test": "jest",
        },
        "dependencies": dependencies,
        "devDependencies": {
            "nodemon": "^2.0.22",
            "jest": "^29.5.0",
        },
    }
    return json.dumps(package, indent=2) + "\n"
