"""crudy configuration.

Typed configuration for the scaffolding engine.  Every setting that the
generated skeleton or the resolver depends on lives on :class:`ScaffoldConfig`
and is passed explicitly to :func:`crudy.project.resolve_project` and
:class:`crudy.scaffolder.ProjectGenerator`; nothing reads ambient global state
after the configuration has been built.

Sources are layered, lowest precedence first: field defaults, a JSON config
file (``~/.crudy.json`` or ``--config``), ``CRUDY_*`` environment variables,
and finally command-line flags.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

CONFIG_FILE_NAME = ".crudy.json"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _default_source_root() -> Path:
    return Path.home() / "go" / "src"


def default_config_path() -> Path:
    """Location of the per-user configuration file."""
    return Path.home() / CONFIG_FILE_NAME


class DatabaseDefaults(BaseModel):
    """Connection defaults baked into the generated configuration loader."""

    host: str = Field(default="localhost", min_length=1)
    user: str = Field(default="user", min_length=1)
    password: str = Field(default="password")
    name: str = Field(default="sample", min_length=1)
    port: int = Field(default=5432, ge=1, le=65535)


class ScaffoldConfig(BaseModel):
    """Settings shared by the resolver and the materializer.

    Instances are created once by the CLI entry point (or by a test) and then
    handed to the rest of the system.
    """

    author: str = Field(
        default="NAME HERE <EMAIL ADDRESS>",
        description="Author used in the copyright line of generated files",
    )
    license: str = Field(default="apache", description="License catalogue key")
    use_license: bool = Field(default=True, description="Emit a license header block")
    use_viper: bool = Field(default=True, description="Generated config loader uses Viper")
    default_secret: str = Field(default="generatecode", min_length=1)
    env_prefix: str = Field(default="prefix", min_length=1)
    database: DatabaseDefaults = Field(default_factory=DatabaseDefaults)
    listen_port: int = Field(default=2323, ge=1, le=65535)
    source_root: Path = Field(
        default_factory=_default_source_root,
        description="Root under which logical (import-style) project names live",
    )
    atomic: bool = Field(
        default=False,
        description="Stage generated files and move them into place only on success",
    )

    # ------------------------------------------------------------------
    # Layering helpers
    # ------------------------------------------------------------------

    def with_overrides(self, **overrides: Any) -> "ScaffoldConfig":
        """Return a validated copy with every non-``None`` override applied.

        Raises:
            ConfigError: If an override does not validate.
        """
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return type(self).model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``~/.crudy.json``.

        Returns:
            The path where the file was written.
        """
        target = path or default_config_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a configuration file written by :meth:`save` (or by hand).

        Missing keys fall back to their defaults.

        Raises:
            ConfigError: If the file cannot be read or does not validate.
        """
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Could not read config file {path}: {exc}") from exc
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    @classmethod
    def from_env(cls, base: "ScaffoldConfig | None" = None) -> "ScaffoldConfig":
        """Layer environment variables on top of *base* (or the defaults).

        Recognised variables (all optional):
            CRUDY_AUTHOR, CRUDY_LICENSE, CRUDY_USE_LICENSE, CRUDY_USE_VIPER,
            CRUDY_DEFAULT_SECRET, CRUDY_ENV_PREFIX, CRUDY_LISTEN_PORT,
            CRUDY_ATOMIC, GOPATH (first entry, ``/src`` appended).
        """
        base = base or cls()
        overrides: dict[str, Any] = {}

        for env_name, field_name in (
            ("CRUDY_AUTHOR", "author"),
            ("CRUDY_LICENSE", "license"),
            ("CRUDY_DEFAULT_SECRET", "default_secret"),
            ("CRUDY_ENV_PREFIX", "env_prefix"),
        ):
            if os.environ.get(env_name):
                overrides[field_name] = os.environ[env_name]

        for env_name, field_name in (
            ("CRUDY_USE_LICENSE", "use_license"),
            ("CRUDY_USE_VIPER", "use_viper"),
            ("CRUDY_ATOMIC", "atomic"),
        ):
            if env_name in os.environ:
                overrides[field_name] = _parse_bool(env_name, os.environ[env_name])

        if os.environ.get("CRUDY_LISTEN_PORT"):
            overrides["listen_port"] = _parse_int(
                "CRUDY_LISTEN_PORT", os.environ["CRUDY_LISTEN_PORT"]
            )

        gopath = os.environ.get("GOPATH", "")
        first_entry = next((p for p in gopath.split(os.pathsep) if p.strip()), "")
        if first_entry:
            overrides["source_root"] = Path(first_entry) / "src"

        return base.with_overrides(**overrides)


def load_config(path: Path | None = None) -> ScaffoldConfig:
    """Build the effective configuration from file and environment.

    When *path* is ``None`` the per-user file is used if it exists; an explicit
    *path* must exist.
    """
    if path is not None:
        config = ScaffoldConfig.load(path)
    elif default_config_path().is_file():
        config = ScaffoldConfig.load(default_config_path())
    else:
        config = ScaffoldConfig()
    return ScaffoldConfig.from_env(config)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got '{value}'")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got '{value}'") from exc
