"""
SpringWell Code Generation Module

Generates Spring Boot sources from field and relationship definitions.
"""

from .core.generator import (
    CodeGenerator,
    GenerationRequest,
    GenerationResult,
    GeneratorError,
    write_artifacts,
)
from .core.definitions import parse_fields, parse_relationships
from .languages.java import SpringGenerator, create_spring_generator

__all__ = [
    "CodeGenerator",
    "GenerationRequest",
    "GenerationResult",
    "GeneratorError",
    "write_artifacts",
    "parse_fields",
    "parse_relationships",
    "SpringGenerator",
    "create_spring_generator",
]
