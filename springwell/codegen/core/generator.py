"""
Base generator interface for all code generation targets.

Defines the request/result types and the contract that language
generators implement. Generators are pure: they return rendered artifacts
and leave persistence to :func:`write_artifacts`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ...config import SpringWellConfig, get_default_config
from ...errors import SpringWellError
from ...logging_config import get_logger
from ...output import OutputSink
from ...utils import write_file
from .definitions import (
    FieldDefinition,
    RelationshipDefinition,
    parse_fields,
    parse_relationships,
)
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(SpringWellError):
    """Base exception for code generation errors."""

    pass


@dataclass
class GenerationRequest:
    """Everything needed to generate an entity and its companions."""

    entity_name: str
    fields: List[FieldDefinition] = field(default_factory=list)
    relationships: List[RelationshipDefinition] = field(default_factory=list)
    table_name: str = ""
    audit: bool = True
    lombok: bool = True
    generate_dto: bool = True
    generate_repository: bool = True
    generate_service: bool = True
    generate_controller: bool = True

    @classmethod
    def from_specs(
        cls,
        entity_name: str,
        fields_spec: str = "",
        relations_spec: str = "",
        table_name: str = "",
        **options: Any,
    ) -> "GenerationRequest":
        """
        Build a request from the raw DSL strings.

        Raises:
            DefinitionError: If either specification is malformed
        """
        if not entity_name or not entity_name.strip():
            raise GeneratorError("Entity name is required")
        return cls(
            entity_name=entity_name.strip(),
            fields=parse_fields(fields_spec or ""),
            relationships=parse_relationships(relations_spec or ""),
            table_name=(table_name or "").strip(),
            **options,
        )


@dataclass(frozen=True)
class TemplateBindings:
    """
    Values available to every artifact template.

    Templates may reference any attribute by name; a reference to anything
    else fails with ``UnboundPlaceholder``.
    """

    entity_name: str
    class_name: str
    variable_name: str
    snake_name: str
    kebab_name: str
    name_plural: str
    resource_path: str
    package: str
    table_name: str
    constant_name: str = ""
    fields: Sequence[FieldDefinition] = ()
    relations: Sequence[RelationshipDefinition] = ()
    imports: Sequence[str] = ()
    dto_imports: Sequence[str] = ()
    audit: bool = True
    lombok: bool = True
    generate_dto: bool = True
    generate_repository: bool = True
    generate_service: bool = True
    generate_controller: bool = True


@dataclass(frozen=True)
class GeneratedArtifact:
    """One rendered output file."""

    kind: str
    path: Path
    content: str


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        artifacts: Optional[List[GeneratedArtifact]] = None,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            artifacts: Rendered artifacts, in generation order
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.artifacts = artifacts or []
        self.warnings = warnings or []
        self.metadata = metadata or {}

    def add(self, kind: str, path: Path, content: str) -> GeneratedArtifact:
        artifact = GeneratedArtifact(kind, path, content)
        self.artifacts.append(artifact)
        return artifact

    def paths(self) -> List[Path]:
        return [a.path for a in self.artifacts]

    def by_kind(self, kind: str) -> GeneratedArtifact:
        for artifact in self.artifacts:
            if artifact.kind == kind:
                return artifact
        raise KeyError(kind)

    def __len__(self) -> int:
        return len(self.artifacts)


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(
        self,
        config: Optional[SpringWellConfig] = None,
        project_dir: Path = Path("."),
    ):
        """Initialize generator with configuration and target project."""
        self.config = config or get_default_config()
        self.project_dir = Path(project_dir)
        self._template_engine = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'java')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.java')."""
        pass

    @abstractmethod
    def get_template_directory(self) -> Path:
        """Return the directory containing built-in templates."""
        pass

    def get_template_names(self) -> Mapping[str, str]:
        """Logical template names understood by this generator."""
        return {}

    def get_override_directory(self) -> Path:
        """Project directory whose templates override the built-ins."""
        return self.config.template_override_dir(self.project_dir)

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(
                self.get_template_directory(),
                self.get_override_directory(),
                self.get_template_names(),
            )
        return self._template_engine

    @abstractmethod
    def generate_entity(self, request: GenerationRequest) -> GenerationResult:
        """
        Render an entity and the companion artifacts it requests.

        Args:
            request: Parsed generation request

        Returns:
            Rendered artifacts; nothing is written
        """
        pass

    def format_code(self, code: str) -> str:
        """
        Apply basic whitespace cleanup to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    def render_template(self, template_ref: str, bindings: Any) -> str:
        """Render a template and tidy the result."""
        return self.format_code(self.template_engine.render(template_ref, bindings))

    def template_exists(self, template_ref: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_ref)


def write_artifacts(
    artifacts: Sequence[GeneratedArtifact], output: Optional[OutputSink] = None
) -> List[Path]:
    """
    Persist rendered artifacts, creating directories as needed.

    Files are written in order; a failure part-way leaves earlier files in
    place.

    Raises:
        GeneratorError: If a file cannot be written
    """
    written = []
    for artifact in artifacts:
        try:
            write_file(artifact.path, artifact.content)
        except OSError as e:
            logger.error("Failed to write %s: %s", artifact.path, e)
            raise GeneratorError(f"Failed to write {artifact.path}: {e}") from e
        written.append(artifact.path)
        logger.info("Generated %s: %s", artifact.kind, artifact.path)
        if output:
            output.success(f"Generated {artifact.kind}: {artifact.path}")
    return written
