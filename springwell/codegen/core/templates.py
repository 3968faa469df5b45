"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering with project
override directories layered over the built-in templates.
"""

from dataclasses import fields as dataclass_fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import jinja2

from ...errors import SpringWellError
from ...logging_config import get_logger
from .naming import pluralize, to_camel_case, to_kebab_case, to_pascal_case, to_snake_case

logger = get_logger(__name__)


class TemplateError(SpringWellError):
    """Exception raised for template-related errors."""

    def __init__(self, message: str, template_name: str):
        super().__init__(message)
        self.template_name = template_name


class TemplateNotFound(TemplateError):
    """Neither the override directory nor the built-ins have the template."""

    def __init__(self, template_name: str, searched: List[Path]):
        locations = ", ".join(str(p) for p in searched) or "<none>"
        super().__init__(
            f"Template {template_name!r} not found (searched: {locations})",
            template_name,
        )
        self.searched = searched


class TemplateSyntaxError(TemplateError):
    """The template body cannot be compiled."""

    def __init__(self, template_name: str, detail: str, lineno: Optional[int] = None):
        where = f" line {lineno}" if lineno else ""
        super().__init__(
            f"Syntax error in template {template_name!r}{where}: {detail}",
            template_name,
        )
        self.lineno = lineno


class UnboundPlaceholder(TemplateError):
    """The template references a binding that was not supplied."""

    def __init__(self, template_name: str, detail: str):
        super().__init__(
            f"Unbound placeholder in template {template_name!r}: {detail}",
            template_name,
        )
        self.detail = detail


def bindings_to_context(bindings: Any) -> Dict[str, Any]:
    """Turn a bindings record or mapping into a template context.

    Dataclass records are flattened one level only so that nested values
    (field and relationship definitions) keep their attributes.
    """
    if is_dataclass(bindings) and not isinstance(bindings, type):
        return {f.name: getattr(bindings, f.name) for f in dataclass_fields(bindings)}
    if isinstance(bindings, Mapping):
        return dict(bindings)
    raise TypeError(f"Unsupported bindings type: {type(bindings).__name__}")


class TemplateEngine:
    """Wrapper for Jinja2 with override-then-builtin template resolution."""

    def __init__(
        self,
        builtin_dir: Path,
        override_dir: Optional[Path] = None,
        template_names: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize template engine.

        Args:
            builtin_dir: Directory containing the default templates
            override_dir: Project directory whose templates take precedence
            template_names: Logical template name to relative path mapping
        """
        self.builtin_dir = Path(builtin_dir)
        self.override_dir = Path(override_dir) if override_dir else None
        self.template_names = dict(template_names or {})
        self._env = None
        self._setup_environment()

    @property
    def search_path(self) -> List[Path]:
        """Directories consulted, highest precedence first."""
        paths = []
        if self.override_dir and self.override_dir.is_dir():
            paths.append(self.override_dir)
        paths.append(self.builtin_dir)
        return paths

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        loader = jinja2.ChoiceLoader(
            [jinja2.FileSystemLoader(str(path)) for path in self.search_path]
        )

        self._env = jinja2.Environment(
            loader=loader,
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._env.filters["snake_case"] = to_snake_case
        self._env.filters["camel_case"] = to_camel_case
        self._env.filters["pascal_case"] = to_pascal_case
        self._env.filters["kebab_case"] = to_kebab_case
        self._env.filters["plural"] = pluralize

        if self.override_dir and self.override_dir.is_dir():
            logger.info("Using template overrides from %s", self.override_dir)

    def resolve_name(self, template_ref: str) -> str:
        """Map a logical template name to its relative path."""
        return self.template_names.get(template_ref, template_ref)

    def template_exists(self, template_ref: str) -> bool:
        """Check if a template exists in any search location."""
        name = self.resolve_name(template_ref)
        return any((path / name).is_file() for path in self.search_path)

    def render(self, template_ref: str, bindings: Any) -> str:
        """
        Render a template with the given bindings.

        Args:
            template_ref: Logical template name or relative template path
            bindings: Bindings record (dataclass) or mapping

        Returns:
            Rendered template content

        Raises:
            TemplateNotFound: If no search location has the template
            TemplateSyntaxError: If the template cannot be compiled
            UnboundPlaceholder: If the template uses a missing binding
        """
        name = self.resolve_name(template_ref)
        context = bindings_to_context(bindings)

        try:
            template = self._env.get_template(name)
        except jinja2.TemplateNotFound:
            logger.error("Template not found: %s", name)
            raise TemplateNotFound(name, self.search_path) from None
        except jinja2.TemplateSyntaxError as e:
            logger.error("Template syntax error in %s: %s", name, e.message)
            raise TemplateSyntaxError(name, e.message or str(e), e.lineno) from e

        try:
            rendered = template.render(**context)
        except jinja2.UndefinedError as e:
            logger.error("Unbound placeholder in %s: %s", name, e.message)
            raise UnboundPlaceholder(name, e.message or str(e)) from e

        logger.debug("Rendered template %s from %s", name, template.filename)
        return rendered

    def render_string(self, template_string: str, bindings: Any) -> str:
        """
        Render a template string with the given bindings.

        Args:
            template_string: Template content as string
            bindings: Bindings record (dataclass) or mapping

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError("<string>", e.message or str(e), e.lineno) from e
        try:
            return template.render(**bindings_to_context(bindings))
        except jinja2.UndefinedError as e:
            raise UnboundPlaceholder("<string>", e.message or str(e)) from e


def create_template_engine(
    builtin_dir: Path,
    override_dir: Optional[Union[str, Path]] = None,
    template_names: Optional[Mapping[str, str]] = None,
) -> TemplateEngine:
    """Factory function to create template engine."""
    return TemplateEngine(
        builtin_dir, Path(override_dir) if override_dir else None, template_names
    )
