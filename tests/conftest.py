"""Shared pytest fixtures for the crudy test suite.

Provides reusable fixtures for:
- A frozen clock so copyright lines are deterministic
- A ScaffoldConfig whose source root lives under ``tmp_path``
- A clean environment (no ``CRUDY_*``/``GOPATH`` leakage, isolated ``HOME``)
- Ready-made projects and generators
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest

from crudy.config import ScaffoldConfig
from crudy.project import Project, resolve_project
from crudy.scaffolder.generator import ProjectGenerator


FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0)

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Strip crudy-related variables and point ``HOME`` at an empty directory."""
    for name in list(os.environ):
        if name.startswith("CRUDY_") or name == "GOPATH":
            monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


# ---------------------------------------------------------------------------
# Configuration & projects
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_clock():
    """Clock returning :data:`FIXED_NOW`."""
    return lambda: FIXED_NOW


@pytest.fixture
def config(tmp_path: Path) -> ScaffoldConfig:
    """Default configuration with an isolated Go source root."""
    return ScaffoldConfig(author="Jane Doe <jane@example.com>", source_root=tmp_path / "go" / "src")


@pytest.fixture
def generator(config: ScaffoldConfig, fixed_clock) -> ProjectGenerator:
    """A ProjectGenerator using the bundled templates and a frozen clock."""
    return ProjectGenerator(config, clock=fixed_clock)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An existing, empty working directory."""
    work = tmp_path / "work"
    work.mkdir()
    return work


@pytest.fixture
def project(tmp_path: Path, config: ScaffoldConfig) -> Project:
    """A project rooted at a not-yet-existing ``tmp_path/newapp``."""
    return resolve_project(tmp_path, [str(tmp_path / "newapp")], config)


@pytest.fixture
def snapshot_tree():
    """Return a function mapping every file under a root to its content."""

    def _snapshot(root: Path) -> dict[str, bytes]:
        return {
            p.relative_to(root).as_posix(): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot
