"""Main scaffolding orchestrator.

Takes a resolved :class:`~crudy.project.Project` and materializes the CRUD
application skeleton under its directory: a ``main`` entry point, the
database and configuration bootstraps, the router package and the two model
stubs.  Files come from a fixed, ordered catalog of Jinja2 templates.

The target directory must be absent or empty.  By default files are written
straight into it and a failure part-way leaves the files written so far in
place; with ``ScaffoldConfig.atomic`` everything is rendered into a sibling
staging directory that replaces the target only once every file succeeded.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Any

from ..config import ScaffoldConfig
from ..errors import DirectoryCreateError, FileWriteError, TargetNotEmptyError
from ..project import Project
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o755
DB_MAX_ATTEMPTS = 5
SAMPLE_RESOURCE = "user"

ContextBuilder = Callable[[Project, ScaffoldConfig, datetime], dict[str, Any]]


# ---------------------------------------------------------------------------
# Context builders
# ---------------------------------------------------------------------------


def copyright_line(author: str, now: datetime) -> str:
    """Attribution line placed at the top of every generated file."""
    return f"Copyright © {now.year} {author}".rstrip()


def _base_context(project: Project, config: ScaffoldConfig, now: datetime) -> dict[str, Any]:
    """Keys every template receives.

    ``license_header`` is only present when the project carries a license with
    header text, so templates guard it with ``is defined``.
    """
    context: dict[str, Any] = {"copyright": copyright_line(config.author, now)}
    if project.license is not None and project.license.present:
        context["license_header"] = project.license.header
    return context


def _main_context(project: Project, config: ScaffoldConfig, now: datetime) -> dict[str, Any]:
    return {
        **_base_context(project, config, now),
        "app_name": project.app_name,
        "domain": project.domain_import,
        "router": project.router_import,
        "listen_port": config.listen_port,
    }


def _db_context(project: Project, config: ScaffoldConfig, now: datetime) -> dict[str, Any]:
    return {
        **_base_context(project, config, now),
        "domain": project.domain_import,
        "db_max_attempts": DB_MAX_ATTEMPTS,
    }


def _config_context(project: Project, config: ScaffoldConfig, now: datetime) -> dict[str, Any]:
    db = config.database
    return {
        **_base_context(project, config, now),
        "domain": project.domain_import,
        "use_viper": config.use_viper,
        "env_prefix": config.env_prefix,
        "default_secret": config.default_secret,
        "db_host": db.host,
        "db_user": db.user,
        "db_password": db.password,
        "db_name": db.name,
        "db_port": db.port,
    }


def _router_context(project: Project, config: ScaffoldConfig, now: datetime) -> dict[str, Any]:
    return {
        **_base_context(project, config, now),
        "domain": project.domain_import,
        "sample_resource": SAMPLE_RESOURCE,
    }


def _model_context(project: Project, config: ScaffoldConfig, now: datetime) -> dict[str, Any]:
    return {**_base_context(project, config, now), "sample_resource": SAMPLE_RESOURCE}


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CatalogEntry:
    """One generated file: template name, destination and context builder."""

    template: str
    destination: str
    build_context: ContextBuilder

    def output_path(self, root: Path) -> Path:
        """Absolute destination of this entry under *root*."""
        return root.joinpath(*PurePosixPath(self.destination).parts)


CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry("main.go.j2", "main.go", _main_context),
    CatalogEntry("db.go.j2", "db.go", _db_context),
    CatalogEntry("config.go.j2", "config.go", _config_context),
    CatalogEntry("router.go.j2", "router/router.go", _router_context),
    CatalogEntry("model_config.go.j2", "model/config.go", _model_context),
    CatalogEntry("model_env.go.j2", "model/env.go", _model_context),
)


# ---------------------------------------------------------------------------
# Target directory checks
# ---------------------------------------------------------------------------


def is_empty_dir(path: Path) -> bool:
    """``True`` if *path* is a directory with no entries at all."""
    with os.scandir(path) as entries:
        return next(entries, None) is None


def check_target(root: Path) -> bool:
    """Validate *root* without mutating it.

    Returns:
        ``True`` if *root* exists (and is an empty directory), ``False`` if it
        is absent.

    Raises:
        TargetNotEmptyError: If *root* holds entries or is not a directory.
        DirectoryCreateError: If *root* exists but cannot be listed.
    """
    if not os.path.lexists(root):
        return False
    if not root.is_dir():
        raise TargetNotEmptyError(root)
    try:
        empty = is_empty_dir(root)
    except OSError as exc:
        raise DirectoryCreateError(root, exc) from exc
    if not empty:
        raise TargetNotEmptyError(root)
    return True


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def make_dirs(path: Path) -> None:
    """Create *path* and any missing ancestors with :data:`DIRECTORY_MODE`."""
    try:
        path.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(path, exc) from exc
    logger.debug("Created directory %s", path)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Materializes the catalog for a resolved project.

    Args:
        config: Settings feeding the template contexts.
        renderer: Template renderer; defaults to the bundled templates.
        catalog: Ordered catalog entries to materialize.
        clock: Returns the invocation time used for the copyright line.
    """

    def __init__(
        self,
        config: ScaffoldConfig | None = None,
        renderer: TemplateRenderer | None = None,
        catalog: Sequence[CatalogEntry] = CATALOG,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or ScaffoldConfig()
        self.renderer = renderer or TemplateRenderer()
        self.catalog = tuple(catalog)
        self.clock = clock

    # -- Public API --------------------------------------------------------

    def generate(self, project: Project) -> list[Path]:
        """Validate the target directory and write every catalog file.

        Returns:
            The written file paths, in catalog order.

        Raises:
            TargetNotEmptyError: The target holds entries; nothing is written.
            DirectoryCreateError: A directory could not be created.
            TemplateRenderError: A template failed to render.
            FileWriteError: A rendered file could not be written.
        """
        root = project.absolute_path
        exists = check_target(root)

        if self.config.atomic:
            return self._generate_staged(project, exists)

        if not exists:
            make_dirs(root)
        return self._render_catalog(project, root)

    # -- Rendering ---------------------------------------------------------

    def _render_catalog(self, project: Project, root: Path) -> list[Path]:
        now = self.clock()
        written: list[Path] = []
        for entry in self.catalog:
            context = entry.build_context(project, self.config, now)
            path = self.renderer.render_to_file(entry.template, entry.output_path(root), context)
            written.append(path)
        return written

    def _generate_staged(self, project: Project, exists: bool) -> list[Path]:
        """Render into a sibling staging directory, then swap it into place.

        A symlinked target is followed: the directory it points to is the one
        replaced, and the link itself is left untouched.
        """
        root = project.absolute_path
        target = Path(os.path.realpath(root)) if root.is_symlink() else root
        make_dirs(target.parent)
        try:
            staging = Path(tempfile.mkdtemp(prefix=f".{target.name}-", dir=target.parent))
        except OSError as exc:
            raise DirectoryCreateError(target.parent, exc) from exc
        logger.debug("Staging %s in %s", target, staging)

        try:
            self._render_catalog(project, staging)
            staging.chmod(DIRECTORY_MODE & ~_current_umask())
            if exists:
                target.rmdir()
            os.replace(staging, target)
        except OSError as exc:
            shutil.rmtree(staging, ignore_errors=True)
            if exists and not target.exists():
                make_dirs(target)
            raise FileWriteError(root, exc) from exc
        except Exception:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        return [entry.output_path(root) for entry in self.catalog]


def materialize(project: Project, config: ScaffoldConfig | None = None) -> list[Path]:
    """Convenience wrapper around :meth:`ProjectGenerator.generate`."""
    return ProjectGenerator(config).generate(project)
