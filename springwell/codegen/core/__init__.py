"""
Core code generation components.

Provides the definition parser, naming transformers, template renderer and
base generator used by the language generators.
"""

from .definitions import (
    DefinitionError,
    FieldDefinition,
    MalformedFieldToken,
    MalformedRelationshipToken,
    RelationshipDefinition,
    RelationshipKind,
    UnknownRelationshipKind,
    parse_fields,
    parse_relationships,
)
from .generator import (
    CodeGenerator,
    GeneratedArtifact,
    GenerationRequest,
    GenerationResult,
    GeneratorError,
    TemplateBindings,
    write_artifacts,
)
from .naming import NameVariants, NamingCase, convert_case, pluralize
from .templates import (
    TemplateEngine,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
    UnboundPlaceholder,
    create_template_engine,
)

__all__ = [
    # Definition parser
    "DefinitionError",
    "FieldDefinition",
    "MalformedFieldToken",
    "MalformedRelationshipToken",
    "RelationshipDefinition",
    "RelationshipKind",
    "UnknownRelationshipKind",
    "parse_fields",
    "parse_relationships",
    # Base generator interface
    "CodeGenerator",
    "GeneratedArtifact",
    "GenerationRequest",
    "GenerationResult",
    "GeneratorError",
    "TemplateBindings",
    "write_artifacts",
    # Naming utilities - language-agnostic
    "NameVariants",
    "NamingCase",
    "convert_case",
    "pluralize",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "TemplateNotFound",
    "TemplateSyntaxError",
    "UnboundPlaceholder",
    "create_template_engine",
]
