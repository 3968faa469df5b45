"""
Java / Spring Boot code generator module.

Generates JPA entities, repositories, services, controllers, DTOs and
Temporal stubs.
"""

from .generator import (
    ARTIFACT_LOCATIONS,
    BUILTIN_TEMPLATE_DIR,
    COMPONENT_ARTIFACTS,
    SpringGenerator,
    create_spring_generator,
)
from .naming import JAVA_RESERVED_WORDS, is_reserved_word, java_identifier
from .types import collect_imports, imports_for_type

__all__ = [
    "SpringGenerator",
    "create_spring_generator",
    "ARTIFACT_LOCATIONS",
    "BUILTIN_TEMPLATE_DIR",
    "COMPONENT_ARTIFACTS",
    "JAVA_RESERVED_WORDS",
    "is_reserved_word",
    "java_identifier",
    "collect_imports",
    "imports_for_type",
]
