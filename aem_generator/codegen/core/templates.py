"""
Template engine wrapper for component generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for artifact generation.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    select_autoescape,
)
from jinja2.exceptions import TemplateError as JinjaTemplateError

from .errors import RenderError
from .naming import NameSanitizer, NamingCase

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class TemplateError(RenderError):
    """Exception raised for template-related errors."""

    pass


def java_string_literal(value: Any) -> str:
    """Quote a value as a Java string literal; None becomes ``null``."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    escaped = (
        str(value)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        if not self.template_dir.is_dir():
            raise TemplateError(f"Template directory not found: {self.template_dir}")

        self._sanitizer = NameSanitizer()
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            # markup and dialog output embed authored values
            autoescape=select_autoescape(
                enabled_extensions=("html.j2", "xml.j2"),
                default_for_string=False,
                default=False,
            ),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._env.filters["kebab_case"] = self._kebab_case_filter
        self._env.filters["upper_first"] = self._upper_first_filter
        self._env.filters["java_string"] = self._java_string_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {e.name}") from e
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    # Template filters for code generation

    def _kebab_case_filter(self, value: str) -> str:
        """Convert identifier to kebab-case."""
        return self._sanitizer.sanitize_name(str(value), NamingCase.KEBAB_CASE)

    def _upper_first_filter(self, value: str) -> str:
        """Upper-case the first character only."""
        value = str(value)
        return value[:1].upper() + value[1:]

    def _java_string_filter(self, value: Any) -> str:
        """Render a value as a quoted Java string literal."""
        return java_string_literal(value)


# Default template engine instance
_default_engine = None


def get_default_template_engine() -> TemplateEngine:
    """Get the default template engine instance."""
    global _default_engine
    if _default_engine is None:
        _default_engine = TemplateEngine()
    return _default_engine


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, reusing the default one for the bundled templates."""
    if template_dir is None:
        return get_default_template_engine()
    return TemplateEngine(Path(template_dir))
