"""Project identity resolution.

Turns the working directory plus the (optional) positional argument given to
``crudy init`` into a :class:`Project`: the absolute directory the skeleton is
written to and the logical name used inside generated import paths.

Resolution is purely lexical.  Nothing here touches the filesystem; checking
and creating the target directory is the materializer's job.
"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import ScaffoldConfig
from .errors import InvalidArgumentError
from .licenses import License, get_license


class Project(BaseModel):
    """The resolved identity of one scaffolding run."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Logical name used in import paths")
    absolute_path: Path = Field(..., description="Directory the skeleton is written to")
    license: License | None = Field(default=None)

    @field_validator("absolute_path")
    @classmethod
    def _must_be_absolute(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"project path must be absolute, got '{value}'")
        return value

    @property
    def domain_import(self) -> str:
        """Import path of the generated ``model`` package."""
        return posixpath.join(self.name, "model")

    @property
    def router_import(self) -> str:
        """Import path of the generated ``router`` package."""
        return posixpath.join(self.name, "router")

    @property
    def app_name(self) -> str:
        """Last segment of :attr:`name`."""
        return posixpath.basename(self.name.rstrip("/")) or self.name

    @classmethod
    def from_path(cls, path: str | os.PathLike[str], license: License | None = None) -> "Project":
        """Build a project rooted at an absolute *path*, named after its last segment."""
        normalized = os.path.normpath(os.fspath(path))
        name = os.path.basename(normalized)
        if not name:
            raise InvalidArgumentError(f"Cannot derive a project name from '{path}'")
        return cls(name=name, absolute_path=Path(normalized), license=license)

    @classmethod
    def from_name(
        cls,
        name: str,
        source_root: str | os.PathLike[str],
        license: License | None = None,
    ) -> "Project":
        """Build a project from a logical import-style *name*.

        The directory is ``<source_root>/<name>``; *name* is kept verbatim.
        """
        root = os.path.abspath(os.fspath(source_root))
        location = os.path.normpath(os.path.join(root, name))
        return cls(name=name, absolute_path=Path(location), license=license)


def resolve_project(
    working_dir: str | os.PathLike[str],
    args: str | Sequence[str] | None = None,
    config: ScaffoldConfig | None = None,
) -> Project:
    """Resolve the project described by the ``init`` positional arguments.

    Rules, first match wins:

    * no argument: the working directory itself;
    * argument starting with ``.``: joined onto the working directory;
    * absolute argument: used as is;
    * anything else: a logical name placed under ``config.source_root``.

    Args:
        working_dir: Absolute path of the directory crudy was invoked from.
        args: The positional argument, or the list of positional arguments;
            at most one is accepted.
        config: Settings providing the license and the source root.

    Raises:
        InvalidArgumentError: For more than one argument, an empty argument,
            or a relative working directory.
    """
    if args is None:
        args = ()
    elif isinstance(args, str):
        args = (args,)
    if len(args) > 1:
        raise InvalidArgumentError("please provide only one argument")

    config = config or ScaffoldConfig()
    wd = os.fspath(working_dir)
    if not os.path.isabs(wd):
        raise InvalidArgumentError(f"working directory must be absolute, got '{wd}'")

    license = get_license(config.license) if config.use_license else None

    if not args:
        return Project.from_path(wd, license)

    arg = args[0]
    if not arg.strip():
        raise InvalidArgumentError("project argument must not be empty")

    if arg.startswith("."):
        arg = os.path.join(wd, arg)

    if os.path.isabs(arg):
        return Project.from_path(arg, license)
    return Project.from_name(arg, config.source_root, license)
