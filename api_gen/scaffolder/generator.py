"""Project generation.

Validates the request (project name, destination, template kind) and writes
the rendered files of a ``TemplateProvider`` under a new project directory.
"""

from __future__ import annotations

import asyncio
import re
import shutil
from pathlib import Path

from .templates import PROJECT_DIRECTORIES, TemplateKind, TemplateProvider


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a project cannot be generated."""


class InvalidProjectNameError(ScaffoldError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("Project name is required")


class DestinationExistsError(ScaffoldError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'Directory "{path.name}" already exists')


class UnknownTemplateError(ScaffoldError):
    def __init__(self, kind: str) -> None:
        self.kind = kind
        available = ", ".join(k.value for k in TemplateKind)
        super().__init__(f"Invalid template type. Available: {available}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def clean_project_name(name: str) -> str:
    """Lowercase *name* and replace anything outside ``[a-z0-9-]`` with ``-``.

    Examples::

        clean_project_name("My API") -> "my-api"
        clean_project_name("shop_v2") -> "shop-v2"

    Raises:
        InvalidProjectNameError: If *name* is empty or only whitespace.
    """
    if not name or not name.strip():
        raise InvalidProjectNameError(name)
    return re.sub(r"[^a-z0-9-]", "-", name.lower())


def resolve_template_kind(kind: str | TemplateKind) -> TemplateKind:
    try:
        return TemplateKind(kind)
    except ValueError:
        raise UnknownTemplateError(str(kind)) from None


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Writes a new Express API project to disk.

    Args:
        provider: Source of the generated files. Defaults to the packaged
            Jinja2 templates.
    """

    def __init__(self, provider: TemplateProvider | None = None) -> None:
        self.provider = provider or TemplateProvider()

    async def generate(
        self,
        project_name: str,
        kind: str | TemplateKind = TemplateKind.BASIC,
        output_dir: str | Path = ".",
    ) -> Path:
        """Generate the project under ``<output_dir>/<clean name>``.

        Args:
            project_name: Name given on the command line; cleaned before use.
            kind: Template kind (``"basic"`` or ``"auth"``).
            output_dir: Parent directory of the new project.

        Returns:
            Path to the generated project root.

        Raises:
            InvalidProjectNameError: Empty project name.
            DestinationExistsError: The project directory already exists.
            UnknownTemplateError: *kind* is not a known template kind.
        """
        clean_name = clean_project_name(project_name)
        project_root = Path(output_dir) / clean_name
        if project_root.exists():
            raise DestinationExistsError(project_root)
        template_kind = resolve_template_kind(kind)

        files = self.provider.render_files(template_kind, clean_name)

        await asyncio.to_thread(project_root.mkdir, parents=True)
        try:
            await asyncio.to_thread(_write_tree, project_root, files)
        except BaseException:
            # Leave nothing behind so a retry is not blocked by the directory.
            await asyncio.to_thread(shutil.rmtree, project_root, ignore_errors=True)
            raise

        return project_root


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_tree(root: Path, files: dict[str, str]) -> None:
    """Synchronous helper: create the skeleton and write every file."""
    for directory in PROJECT_DIRECTORIES:
        (root / directory).mkdir(parents=True, exist_ok=True)
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
