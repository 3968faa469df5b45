"""
Tests for the naming transformers (springwell/codegen/core/naming.py and
springwell/codegen/languages/java/naming.py).

Run: pytest tests/test_naming.py -v
"""

import pytest

from springwell.codegen.core.naming import (
    NameVariants,
    NamingCase,
    convert_case,
    pluralize,
    split_words,
    to_camel_case,
    to_dotted_package_name,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)
from springwell.codegen.languages.java.naming import is_reserved_word, java_identifier

EQUIVALENT_SPELLINGS = ["UserAccount", "userAccount", "user_account", "user-account", "user account"]


@pytest.mark.parametrize("name", EQUIVALENT_SPELLINGS)
def test_equivalent_spellings_convert_identically(name):
    assert to_pascal_case(name) == "UserAccount"
    assert to_camel_case(name) == "userAccount"
    assert to_snake_case(name) == "user_account"
    assert to_kebab_case(name) == "user-account"


def test_split_words():
    assert split_words("BlogPost") == ["Blog", "Post"]
    assert split_words("__blog--post__") == ["blog", "post"]
    assert split_words("") == []


def test_empty_input():
    assert to_pascal_case("") == ""
    assert to_camel_case("") == ""
    assert to_snake_case("") == ""
    assert to_kebab_case("") == ""


def test_consecutive_capitals_form_one_word():
    assert to_snake_case("HTTPServer") == "httpserver"


def test_dotted_package_name():
    assert to_dotted_package_name("My-App_core") == "my.app.core"


@pytest.mark.parametrize(
    "word, plural",
    [
        ("post", "posts"),
        ("category", "categories"),
        ("day", "days"),
        ("address", "addresses"),
        ("box", "boxes"),
        ("match", "matches"),
        ("wish", "wishes"),
        ("blog_post", "blog_posts"),
        ("", ""),
    ],
)
def test_pluralize(word, plural):
    assert pluralize(word) == plural


def test_convert_case():
    assert convert_case("blogPost", NamingCase.SCREAMING_SNAKE) == "BLOG_POST"
    assert convert_case("blogPost", NamingCase.KEBAB_CASE) == "blog-post"


def test_name_variants():
    names = NameVariants.of("BlogPost")
    assert names.pascal == "BlogPost"
    assert names.camel == "blogPost"
    assert names.snake_plural == "blog_posts"
    assert names.kebab_plural == "blog-posts"
    assert names.camel_plural == "blogPosts"
    assert names.constant == "BLOG_POST"


class TestJavaIdentifier:
    def test_reserved_words(self):
        assert is_reserved_word("class")
        assert not is_reserved_word("clazz")

    def test_collision_gets_suffix(self):
        assert java_identifier("class") == "class_"
        assert java_identifier("default", suffix_on_conflict="Value") == "defaultValue"

    def test_camel_cases_names(self):
        assert java_identifier("first_name") == "firstName"

    def test_leading_digit(self):
        assert java_identifier("2fa") == "_2fa"
