"""api-gen scaffolder -- writes Express API boilerplates to disk.

Quick usage::

    from api_gen.scaffolder import ProjectGenerator

    project_path = await ProjectGenerator().generate("my-api", "auth", "/tmp")
"""

from api_gen.scaffolder.generator import (
    DestinationExistsError,
    InvalidProjectNameError,
    ProjectGenerator,
    ScaffoldError,
    UnknownTemplateError,
    clean_project_name,
)
from api_gen.scaffolder.templates import TemplateKind, TemplateProvider, TemplateRenderer

__all__ = [
    "DestinationExistsError",
    "InvalidProjectNameError",
    "ProjectGenerator",
    "ScaffoldError",
    "TemplateKind",
    "TemplateProvider",
    "TemplateRenderer",
    "UnknownTemplateError",
    "clean_project_name",
]
