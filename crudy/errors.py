"""Exceptions raised by the crudy scaffolding engine.

Every failure the resolver or the materializer can detect is reported as a
subclass of :class:`CrudyError`.  The CLI driver catches that base class,
prints a single-line message and exits non-zero; nothing below it retries or
recovers.
"""

from __future__ import annotations

from pathlib import Path


class CrudyError(Exception):
    """Base class for every error surfaced to the CLI driver."""


class InvalidArgumentError(CrudyError):
    """Raised for bad command-line usage (e.g. more than one positional argument)."""


class ConfigError(CrudyError):
    """Raised when a configuration source holds an invalid value."""


class UnknownLicenseError(CrudyError):
    """Raised when a license key is not present in the license catalogue."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown license '{key}'")


class DirectoryCreateError(CrudyError):
    """Raised when the project root (or a sub-directory) cannot be created."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not create directory {path}: {cause}")


class TargetNotEmptyError(CrudyError):
    """Raised when the project root already exists and holds entries."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Crudy will not create a new project in a non empty directory: {path}"
        )


class TemplateRenderError(CrudyError):
    """Raised when a catalog template cannot be rendered."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__(f"Could not render template '{template}': {message}")


class FileWriteError(CrudyError):
    """Raised when a rendered file cannot be written to disk."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")
