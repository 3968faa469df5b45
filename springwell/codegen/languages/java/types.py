"""
Java type handling for generated sources.

Maps field type tokens to the imports they need. Type tokens are passed
through verbatim; anything not listed here is assumed to be in
``java.lang`` or the user's own package.
"""

import re
from typing import Iterable, List, Set

from ...core.definitions import FieldDefinition, RelationshipDefinition

JAVA_TYPE_IMPORTS = {
    "LocalDate": "java.time.LocalDate",
    "LocalDateTime": "java.time.LocalDateTime",
    "LocalTime": "java.time.LocalTime",
    "Instant": "java.time.Instant",
    "OffsetDateTime": "java.time.OffsetDateTime",
    "ZonedDateTime": "java.time.ZonedDateTime",
    "Duration": "java.time.Duration",
    "BigDecimal": "java.math.BigDecimal",
    "BigInteger": "java.math.BigInteger",
    "UUID": "java.util.UUID",
    "Date": "java.util.Date",
}

AUDIT_TIMESTAMP_TYPE = "LocalDateTime"
COLLECTION_IMPORTS = ("java.util.ArrayList", "java.util.List")
JAVA_UTIL_COLLECTIONS = ("List", "Set", "Map")

_IDENTIFIER = re.compile(r"[A-Za-z_]\w*")


def imports_for_type(type_name: str) -> Set[str]:
    """Imports needed to reference ``type_name``, including generic arguments.

    Every identifier in the token is looked up, so nested or unbalanced
    generics (``Map<String,Map<String,UUID>>``, ``List<String``) never fail.
    """
    imports = set()
    for name in _IDENTIFIER.findall(type_name):
        if name in JAVA_TYPE_IMPORTS:
            imports.add(JAVA_TYPE_IMPORTS[name])
        elif name in JAVA_UTIL_COLLECTIONS:
            imports.add(f"java.util.{name}")
    return imports


def collect_imports(
    fields: Iterable[FieldDefinition],
    relations: Iterable[RelationshipDefinition] = (),
    audit: bool = False,
) -> List[str]:
    """
    Collect sorted import statements for an entity-like class.

    Args:
        fields: Declared fields
        relations: Declared relationships
        audit: Whether audit timestamps are emitted

    Returns:
        Sorted fully-qualified names to import
    """
    imports: Set[str] = set()

    for f in fields:
        imports |= imports_for_type(f.type_name)

    if any(rel.is_collection for rel in relations):
        imports.update(COLLECTION_IMPORTS)

    if audit:
        imports.add(JAVA_TYPE_IMPORTS[AUDIT_TIMESTAMP_TYPE])

    return sorted(imports)
