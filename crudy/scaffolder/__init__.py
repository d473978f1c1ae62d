"""crudy scaffolder -- materializes the CRUD application skeleton.

Quick usage::

    from crudy.project import resolve_project
    from crudy.scaffolder import ProjectGenerator

    project = resolve_project("/home/me/work", ["./shop"])
    written = ProjectGenerator().generate(project)
"""

from crudy.scaffolder.generator import (
    CATALOG,
    CatalogEntry,
    ProjectGenerator,
    copyright_line,
    materialize,
)
from crudy.scaffolder.templates import TemplateRenderer

__all__ = [
    "CATALOG",
    "CatalogEntry",
    "ProjectGenerator",
    "TemplateRenderer",
    "copyright_line",
    "materialize",
]
