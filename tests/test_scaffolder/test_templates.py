"""Tests for the Jinja2 template renderer.

Covers:
- Placeholder interpolation and conditional blocks
- Strict handling of undefined variables and broken templates
- The ``comment`` and ``go_string`` filters
- render_to_file directory creation and error mapping
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from crudy.errors import DirectoryCreateError, FileWriteError, TemplateRenderError
from crudy.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def custom_renderer(tmp_path: Path) -> TemplateRenderer:
    """A renderer over a throwaway template directory."""
    template_dir = tmp_path / "templates"
    template_dir.mkdir()
    (template_dir / "hello.txt.j2").write_text("Hello {{ name }}!\n", encoding="utf-8")
    (template_dir / "broken.txt.j2").write_text("{% if %}\n", encoding="utf-8")
    return TemplateRenderer(template_dir)


# ---------------------------------------------------------------------------
# String rendering
# ---------------------------------------------------------------------------


class TestRenderString:
    def test_placeholder(self, renderer):
        assert renderer.render_string("pkg {{ domain }}", {"domain": "shop/model"}) == "pkg shop/model"

    def test_conditional_block_rendered_when_defined(self, renderer):
        tpl = "{% if license_header is defined %}{{ license_header }}{% endif %}"
        assert renderer.render_string(tpl, {"license_header": "MIT"}) == "MIT"

    def test_conditional_block_omitted_when_absent(self, renderer):
        tpl = "a{% if license_header is defined %}{{ license_header }}{% endif %}b"
        assert renderer.render_string(tpl, {}) == "ab"

    def test_undefined_variable_is_an_error(self, renderer):
        with pytest.raises(TemplateRenderError):
            renderer.render_string("{{ missing }}", {})

    def test_syntax_error(self, renderer):
        with pytest.raises(TemplateRenderError):
            renderer.render_string("{% for %}", {})

    def test_pure(self, renderer):
        ctx = {"copyright": "Copyright © 2024 Jane", "domain": "x/model"}
        tpl = "{{ copyright | comment }}\n{{ domain }}"
        assert renderer.render_string(tpl, ctx) == renderer.render_string(tpl, ctx)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class TestFilters:
    def test_comment_prefixes_lines(self, renderer):
        out = renderer.render_string("{{ text | comment }}", {"text": "one\n\ntwo"})
        assert out == "// one\n//\n// two"

    def test_comment_keeps_existing_comments(self, renderer):
        out = renderer.render_string("{{ text | comment }}", {"text": "// already"})
        assert out == "// already"

    def test_go_string_quotes_and_escapes(self, renderer):
        out = renderer.render_string("{{ value | go_string }}", {"value": 'pa"ss\\word'})
        assert out == '"pa\\"ss\\\\word"'


# ---------------------------------------------------------------------------
# File rendering
# ---------------------------------------------------------------------------


class TestRenderToFile:
    def test_creates_parent_directories(self, custom_renderer, tmp_path: Path):
        out = tmp_path / "out" / "nested" / "hello.txt"
        path = custom_renderer.render_to_file("hello.txt.j2", out, {"name": "crudy"})
        assert path == out
        assert out.read_text(encoding="utf-8") == "Hello crudy!\n"

    def test_missing_template(self, custom_renderer, tmp_path: Path):
        with pytest.raises(TemplateRenderError) as exc_info:
            custom_renderer.render_to_file("nope.j2", tmp_path / "x", {})
        assert exc_info.value.template == "nope.j2"
        assert not (tmp_path / "x").exists()

    def test_broken_template(self, custom_renderer, tmp_path: Path):
        with pytest.raises(TemplateRenderError):
            custom_renderer.render_to_file("broken.txt.j2", tmp_path / "x", {})

    def test_write_failure_is_wrapped(self, custom_renderer, tmp_path: Path):
        with patch.object(Path, "write_text", side_effect=PermissionError("denied")):
            with pytest.raises(FileWriteError) as exc_info:
                custom_renderer.render_to_file("hello.txt.j2", tmp_path / "hello.txt", {"name": "x"})
        assert exc_info.value.path == tmp_path / "hello.txt"
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_parent_is_a_file(self, custom_renderer, tmp_path: Path):
        (tmp_path / "blocker").write_text("", encoding="utf-8")
        with pytest.raises(DirectoryCreateError):
            custom_renderer.render_to_file(
                "hello.txt.j2", tmp_path / "blocker" / "hello.txt", {"name": "x"}
            )

