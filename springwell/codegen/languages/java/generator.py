"""
Spring Boot code generator implementation.

Generates JPA entities, Spring Data repositories, services, REST
controllers, DTOs and Temporal workflow/activity stubs using templates.
"""

from pathlib import Path
from typing import Dict, List, Optional

from ....config import SpringWellConfig
from ....logging_config import get_logger
from ....utils import java_package_dir
from ...core.definitions import FieldDefinition
from ...core.generator import (
    CodeGenerator,
    GenerationRequest,
    GenerationResult,
    GeneratorError,
    TemplateBindings,
)
from ...core.naming import NameVariants
from .naming import java_identifier
from .types import collect_imports

logger = get_logger(__name__)

BUILTIN_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Logical template name -> template file relative to the template directory
TEMPLATE_FILES: Dict[str, str] = {
    "entity": "entity/entity.java.j2",
    "repository": "entity/repository.java.j2",
    "service": "entity/service.java.j2",
    "controller": "entity/controller.java.j2",
    "dto": "entity/dto.java.j2",
    "workflow": "temporal/workflow.java.j2",
    "workflow_impl": "temporal/workflow_impl.java.j2",
    "activity": "temporal/activity.java.j2",
    "activity_impl": "temporal/activity_impl.java.j2",
}

# Artifact kind -> (subpackage, class name suffix)
ARTIFACT_LOCATIONS: Dict[str, tuple] = {
    "entity": ("domain/entity", ""),
    "repository": ("repository", "Repository"),
    "service": ("service", "Service"),
    "controller": ("controller", "Controller"),
    "dto": ("domain/dto", "DTO"),
    "workflow": ("temporal/workflow", "Workflow"),
    "workflow_impl": ("temporal/workflow/impl", "WorkflowImpl"),
    "activity": ("temporal/activity", "Activity"),
    "activity_impl": ("temporal/activity/impl", "ActivityImpl"),
}

# Standalone component kind -> artifacts it produces
COMPONENT_ARTIFACTS: Dict[str, List[str]] = {
    "entity": ["entity"],
    "controller": ["controller"],
    "service": ["service"],
    "repository": ["repository"],
    "dto": ["dto"],
    "workflow": ["workflow", "workflow_impl", "activity", "activity_impl"],
    "activity": ["activity", "activity_impl"],
}


class SpringGenerator(CodeGenerator):
    """Code generator for Spring Boot Java sources."""

    def __init__(
        self, config: Optional[SpringWellConfig] = None, project_dir: Path = Path(".")
    ):
        super().__init__(config, project_dir)

    @property
    def language_name(self) -> str:
        return "java"

    @property
    def file_extension(self) -> str:
        return ".java"

    def get_template_directory(self) -> Path:
        """Return the built-in Java templates directory."""
        return BUILTIN_TEMPLATE_DIR

    def get_template_names(self) -> Dict[str, str]:
        return TEMPLATE_FILES

    @property
    def package(self) -> str:
        return self.config.project.package

    def artifact_path(self, kind: str, class_name: str) -> Path:
        """Destination of an artifact inside the project sources."""
        subpackage, suffix = ARTIFACT_LOCATIONS[kind]
        directory = java_package_dir(self.project_dir, self.package, subpackage)
        return directory / f"{class_name}{suffix}{self.file_extension}"

    def build_bindings(self, request: GenerationRequest) -> TemplateBindings:
        """Derive every name variant and option the templates use."""
        names = NameVariants.of(request.entity_name)
        fields = request.fields
        if self.config.code.standardize_fields:
            fields = [
                FieldDefinition(java_identifier(f.name), f.type_name, f.nullable)
                for f in fields
            ]

        return TemplateBindings(
            entity_name=request.entity_name,
            class_name=names.pascal,
            variable_name=java_identifier(names.camel),
            snake_name=names.snake,
            kebab_name=names.kebab,
            name_plural=names.camel_plural,
            resource_path=names.kebab_plural,
            package=self.package,
            table_name=request.table_name or names.snake_plural,
            constant_name=names.constant,
            fields=tuple(fields),
            relations=tuple(request.relationships),
            imports=tuple(collect_imports(fields, request.relationships, request.audit)),
            dto_imports=tuple(collect_imports(fields, (), request.audit)),
            audit=request.audit,
            lombok=request.lombok,
            generate_dto=request.generate_dto,
            generate_repository=request.generate_repository,
            generate_service=request.generate_service,
            generate_controller=request.generate_controller,
        )

    def generate_entity(self, request: GenerationRequest) -> GenerationResult:
        """Render the entity plus the repository, service, controller and DTO it asks for."""
        bindings = self.build_bindings(request)
        kinds = ["entity"]
        if request.generate_repository:
            kinds.append("repository")
        if request.generate_service:
            kinds.append("service")
        if request.generate_controller:
            kinds.append("controller")
        if request.generate_dto:
            kinds.append("dto")

        logger.info("Generating %s for entity %s", kinds, bindings.class_name)
        return self._render_all(kinds, bindings)

    def generate_component(
        self, kind: str, name: str, lombok: Optional[bool] = None
    ) -> GenerationResult:
        """
        Render a standalone component with no declared fields.

        Args:
            kind: One of ``COMPONENT_ARTIFACTS``
            name: Component name in any case style
            lombok: Use Lombok annotations (defaults to the project setting)

        Raises:
            GeneratorError: If the component kind is unknown
        """
        if kind not in COMPONENT_ARTIFACTS:
            available = ", ".join(COMPONENT_ARTIFACTS)
            raise GeneratorError(
                f"Unknown component type: {kind}. Available: {available}"
            )
        if not name or not name.strip():
            raise GeneratorError("Component name is required")

        request = GenerationRequest(
            entity_name=name.strip(),
            lombok=self.config.code.lombok if lombok is None else lombok,
        )
        bindings = self.build_bindings(request)
        logger.info("Generating %s component %s", kind, bindings.class_name)
        return self._render_all(COMPONENT_ARTIFACTS[kind], bindings)

    def _render_all(self, kinds: List[str], bindings: TemplateBindings) -> GenerationResult:
        result = GenerationResult(
            metadata={
                "language": self.language_name,
                "class_name": bindings.class_name,
                "table_name": bindings.table_name,
                "resource_path": bindings.resource_path,
            }
        )
        for kind in kinds:
            content = self.render_template(kind, bindings)
            result.add(kind, self.artifact_path(kind, bindings.class_name), content)

        if not bindings.fields and "entity" in kinds:
            result.warnings.append(f"Entity {bindings.class_name} has no declared fields")
        return result


def create_spring_generator(
    config: Optional[SpringWellConfig] = None, project_dir: Path = Path(".")
) -> SpringGenerator:
    """Create a Spring generator for a project."""
    return SpringGenerator(config, project_dir)
