"""
Field and relationship definition parsing.

Parses the compact mini-languages accepted by ``generate entity``::

    fields:        "email:String name:String:nullable age:Integer"
    relationships: "manyToOne:author:User oneToMany:comments:Comment"
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ...errors import SpringWellError
from ...logging_config import get_logger
from .naming import to_pascal_case, to_snake_case

logger = get_logger(__name__)

NULLABLE_MODIFIER = "nullable"


class DefinitionError(SpringWellError):
    """Base exception for field/relationship definition errors."""

    def __init__(self, message: str, token: str):
        super().__init__(message)
        self.token = token


class MalformedFieldToken(DefinitionError):
    """A field token lacks the ``name:type`` structure."""

    def __init__(self, token: str):
        super().__init__(
            f"invalid field format: {token!r}, expected name:type[:modifier]", token
        )


class MalformedRelationshipToken(DefinitionError):
    """A relationship token is not exactly ``kind:field:entity``."""

    def __init__(self, token: str):
        super().__init__(
            f"invalid relationship format: {token!r}, expected type:field:entity",
            token,
        )


class UnknownRelationshipKind(DefinitionError):
    """A relationship kind outside the supported set."""

    def __init__(self, token: str, kind: str):
        expected = ", ".join(k.value for k in RelationshipKind)
        super().__init__(
            f"invalid relationship type: {kind!r}, expected one of {expected}", token
        )
        self.kind = kind


class RelationshipKind(Enum):
    """Supported JPA association kinds, keyed by their DSL spelling."""

    ONE_TO_ONE = "oneToOne"
    ONE_TO_MANY = "oneToMany"
    MANY_TO_ONE = "manyToOne"
    MANY_TO_MANY = "manyToMany"

    @property
    def annotation(self) -> str:
        """JPA annotation name, e.g. ``ManyToOne``."""
        return to_pascal_case(self.value)

    @property
    def is_collection(self) -> bool:
        return self in (RelationshipKind.ONE_TO_MANY, RelationshipKind.MANY_TO_MANY)

    @property
    def owns_join_column(self) -> bool:
        return self in (RelationshipKind.ONE_TO_ONE, RelationshipKind.MANY_TO_ONE)


@dataclass(frozen=True)
class FieldDefinition:
    """One attribute of a generated entity."""

    name: str
    type_name: str
    nullable: bool = False
    column_name: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "column_name", to_snake_case(self.name))

    def to_token(self) -> str:
        """Render back to DSL form."""
        token = f"{self.name}:{self.type_name}"
        return f"{token}:{NULLABLE_MODIFIER}" if self.nullable else token


@dataclass(frozen=True)
class RelationshipDefinition:
    """An association from the generated entity to another entity."""

    kind: RelationshipKind
    field_name: str
    target_entity: str

    @property
    def annotation(self) -> str:
        return self.kind.annotation

    @property
    def is_collection(self) -> bool:
        return self.kind.is_collection

    @property
    def join_column(self) -> str:
        """Foreign key column for owning single-valued associations."""
        return f"{to_snake_case(self.field_name)}_id"

    def to_token(self) -> str:
        return f"{self.kind.value}:{self.field_name}:{self.target_entity}"


def parse_fields(spec: str) -> List[FieldDefinition]:
    """
    Parse a field specification string.

    Args:
        spec: Whitespace-separated ``name:type[:nullable]`` tokens

    Returns:
        Field definitions in input order (empty for an empty spec)

    Raises:
        MalformedFieldToken: If a token has no name or type part
    """
    fields: List[FieldDefinition] = []

    for token in spec.split():
        parts = token.split(":")
        if len(parts) < 2 or not parts[0] or not parts[1]:
            logger.error("Malformed field token: %s", token)
            raise MalformedFieldToken(token)

        name, type_name = parts[0], parts[1]
        nullable = False
        if len(parts) > 2:
            if parts[2] == NULLABLE_MODIFIER:
                nullable = True
            else:
                logger.warning(
                    "Ignoring unknown modifier %r on field %r", parts[2], name
                )
            if len(parts) > 3:
                logger.warning(
                    "Ignoring extra parts %r on field %r", parts[3:], name
                )

        fields.append(FieldDefinition(name, type_name, nullable))

    logger.debug("Parsed %d field(s) from %r", len(fields), spec)
    return fields


def parse_relationships(spec: str) -> List[RelationshipDefinition]:
    """
    Parse a relationship specification string.

    Args:
        spec: Whitespace-separated ``kind:field:Entity`` tokens

    Returns:
        Relationship definitions in input order (empty for an empty spec)

    Raises:
        MalformedRelationshipToken: If a token is not exactly three parts
        UnknownRelationshipKind: If the kind is not supported
    """
    relations: List[RelationshipDefinition] = []

    for token in spec.split():
        parts = token.split(":")
        if len(parts) != 3 or not all(parts):
            logger.error("Malformed relationship token: %s", token)
            raise MalformedRelationshipToken(token)

        kind_name, field_name, target = parts
        try:
            kind = RelationshipKind(kind_name)
        except ValueError:
            logger.error("Unknown relationship kind %r in %s", kind_name, token)
            raise UnknownRelationshipKind(token, kind_name) from None

        relations.append(RelationshipDefinition(kind, field_name, target))

    logger.debug("Parsed %d relationship(s) from %r", len(relations), spec)
    return relations
