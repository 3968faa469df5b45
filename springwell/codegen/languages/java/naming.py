"""
Java-specific naming utilities.

Handles Java reserved words and identifier conventions.
"""

from ...core.naming import to_camel_case

# Java reserved words and literals
JAVA_RESERVED_WORDS = {
    "abstract",
    "assert",
    "boolean",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "class",
    "const",
    "continue",
    "default",
    "do",
    "double",
    "else",
    "enum",
    "extends",
    "false",
    "final",
    "finally",
    "float",
    "for",
    "goto",
    "if",
    "implements",
    "import",
    "instanceof",
    "int",
    "interface",
    "long",
    "native",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "record",
    "return",
    "short",
    "static",
    "strictfp",
    "super",
    "switch",
    "synchronized",
    "this",
    "throw",
    "throws",
    "transient",
    "true",
    "try",
    "var",
    "void",
    "volatile",
    "while",
    "yield",
}


def is_reserved_word(name: str) -> bool:
    """Check whether a name collides with a Java keyword or literal."""
    return name in JAVA_RESERVED_WORDS


def java_identifier(name: str, suffix_on_conflict: str = "_") -> str:
    """
    Convert a name to a camelCase Java identifier.

    Names colliding with reserved words get ``suffix_on_conflict``
    appended (``class`` -> ``class_``).
    """
    identifier = to_camel_case(name)
    if identifier and identifier[0].isdigit():
        identifier = f"_{identifier}"
    if is_reserved_word(identifier):
        identifier = f"{identifier}{suffix_on_conflict}"
    return identifier
