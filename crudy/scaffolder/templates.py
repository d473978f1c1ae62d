"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``crudy/scaffolder/templates/`` directory and renders them with a per-file
context.  Undefined variables are errors (``StrictUndefined``), so a context
builder that forgets a key fails loudly instead of emitting broken source.
Optional blocks are guarded with ``{% if key is defined %}``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ..errors import DirectoryCreateError, FileWriteError, TemplateRenderError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer loads ``.j2`` template files from a configurable
    template directory.  Rendering is pure: the same template and context
    always produce the same text.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["comment"] = _comment_filter
        self.env.filters["go_string"] = _go_string_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"main.go.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.

        Raises:
            TemplateRenderError: If the template is missing, malformed, or
                references a variable absent from *context*.
        """
        try:
            template = self.env.get_template(template_path)
            return template.render(**context)
        except TemplateError as exc:
            raise TemplateRenderError(template_path, str(exc) or type(exc).__name__) from exc

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        try:
            template = self.env.from_string(template_string)
            return template.render(**context)
        except TemplateError as exc:
            raise TemplateRenderError("<string>", str(exc) or type(exc).__name__) from exc

    # -- File-based rendering ----------------------------------------------

    def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  Returns the output path.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        _write_file(out, content)
        logger.debug("Rendered %s -> %s", template_path, out)
        return out


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _comment_filter(value: str) -> str:
    """Turn every line of *value* into a ``//`` comment line.

    Lines that already start with ``//`` are kept, blank lines become a bare
    ``//``.
    """
    lines = []
    for line in str(value).split("\n"):
        if line.startswith("//"):
            lines.append(line)
        elif line == "":
            lines.append("//")
        else:
            lines.append(f"// {line}")
    return "\n".join(lines)


def _go_string_filter(value: Any) -> str:
    """Render *value* as a double-quoted Go string literal."""
    return json.dumps(str(value), ensure_ascii=False)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write content, mapping OS errors to crudy errors."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(path.parent, exc) from exc
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FileWriteError(path, exc) from exc
