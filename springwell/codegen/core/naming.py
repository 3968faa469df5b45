"""
Naming utilities for code generation.

Converts one user-supplied identifier into every form the generated
sources need: class names, variable names, table and column names, URL
segments and package names. All conversions share a single segmentation so
that ``UserAccount``, ``user_account``, ``user-account`` and ``user account``
produce identical results.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

_CASE_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


def split_words(name: str) -> List[str]:
    """
    Split an identifier into its words.

    Breaks on any run of non-alphanumeric characters and between a
    lowercase letter followed by an uppercase one.

    Args:
        name: Identifier in any case style

    Returns:
        List of words, original casing preserved
    """
    spaced = _CASE_BOUNDARY.sub(r"\1 \2", name)
    return [word for word in _SEPARATORS.split(spaced) if word]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase (``blog_post`` -> ``BlogPost``)."""
    return "".join(_capitalize(word) for word in split_words(name))


def to_camel_case(name: str) -> str:
    """Convert to camelCase (``blog_post`` -> ``blogPost``)."""
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def to_snake_case(name: str) -> str:
    """Convert to snake_case (``BlogPost`` -> ``blog_post``)."""
    return "_".join(word.lower() for word in split_words(name))


def to_kebab_case(name: str) -> str:
    """Convert to kebab-case (``BlogPost`` -> ``blog-post``)."""
    return "-".join(word.lower() for word in split_words(name))


def to_dotted_package_name(name: str) -> str:
    """Convert to a package segment (``my-app_core`` -> ``my.app.core``)."""
    return name.lower().replace("-", ".").replace("_", ".")


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(name)
    elif target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(name)
    elif target_case == NamingCase.KEBAB_CASE:
        return to_kebab_case(name)
    elif target_case == NamingCase.SCREAMING_SNAKE:
        return to_snake_case(name).upper()
    else:
        return name


def pluralize(word: str) -> str:
    """
    Naive English pluralization of the last word.

    ``category`` -> ``categories``, ``address`` -> ``addresses``,
    ``post`` -> ``posts``.
    """
    if not word:
        return word
    lower = word.lower()
    if lower.endswith("y") and len(word) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + "ies"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


@dataclass(frozen=True)
class NameVariants:
    """Every derived form of a single identifier."""

    raw: str
    pascal: str
    camel: str
    snake: str
    kebab: str
    camel_plural: str
    snake_plural: str
    kebab_plural: str
    constant: str

    @classmethod
    def of(cls, name: str) -> "NameVariants":
        camel = convert_case(name, NamingCase.CAMEL_CASE)
        snake = convert_case(name, NamingCase.SNAKE_CASE)
        kebab = convert_case(name, NamingCase.KEBAB_CASE)
        return cls(
            raw=name,
            pascal=convert_case(name, NamingCase.PASCAL_CASE),
            camel=camel,
            snake=snake,
            kebab=kebab,
            camel_plural=pluralize(camel),
            snake_plural=pluralize(snake),
            kebab_plural=pluralize(kebab),
            constant=convert_case(name, NamingCase.SCREAMING_SNAKE),
        )
