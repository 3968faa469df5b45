"""
Tests for the template renderer (springwell/codegen/core/templates.py).

Verifies override-before-builtin resolution, strict placeholders and the
error types raised for missing or broken templates.

Run: pytest tests/test_templates.py -v
"""

from dataclasses import dataclass
from pathlib import Path

import pytest

from springwell.codegen.core.templates import (
    TemplateEngine,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
    UnboundPlaceholder,
    bindings_to_context,
    create_template_engine,
)


@dataclass
class Bindings:
    class_name: str
    package: str


def _write(directory: Path, name: str, body: str) -> None:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")


@pytest.fixture
def builtin_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "builtin"
    _write(directory, "entity/entity.java.j2", "package {{ package }};\nclass {{ class_name }} {}\n")
    _write(directory, "entity/dto.java.j2", "class {{ class_name }}DTO {}\n")
    return directory


@pytest.fixture
def override_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "project" / ".springwell" / "templates"
    _write(directory, "entity/entity.java.j2", "// custom\nclass {{ class_name }} {}\n")
    return directory


BINDINGS = Bindings(class_name="BlogPost", package="com.example")


class TestResolution:
    def test_builtin_used_without_override(self, builtin_dir):
        engine = TemplateEngine(builtin_dir)
        assert engine.render("entity/entity.java.j2", BINDINGS) == (
            "package com.example;\nclass BlogPost {}\n"
        )

    def test_override_takes_precedence(self, builtin_dir, override_dir):
        engine = TemplateEngine(builtin_dir, override_dir)
        assert engine.render("entity/entity.java.j2", BINDINGS).startswith("// custom")

    def test_missing_override_falls_back_per_file(self, builtin_dir, override_dir):
        engine = TemplateEngine(builtin_dir, override_dir)
        assert engine.render("entity/dto.java.j2", BINDINGS) == "class BlogPostDTO {}\n"

    def test_nonexistent_override_dir_is_skipped(self, builtin_dir, tmp_path):
        engine = TemplateEngine(builtin_dir, tmp_path / "missing")
        assert engine.search_path == [builtin_dir]

    def test_logical_names(self, builtin_dir):
        engine = create_template_engine(builtin_dir, None, {"entity": "entity/entity.java.j2"})
        assert engine.template_exists("entity")
        assert "class BlogPost" in engine.render("entity", BINDINGS)

    def test_rendering_is_deterministic(self, builtin_dir):
        engine = TemplateEngine(builtin_dir)
        first = engine.render("entity/entity.java.j2", BINDINGS)
        assert engine.render("entity/entity.java.j2", BINDINGS) == first


class TestErrors:
    def test_not_found(self, builtin_dir, override_dir):
        engine = TemplateEngine(builtin_dir, override_dir)
        assert not engine.template_exists("entity/missing.java.j2")
        with pytest.raises(TemplateNotFound) as exc:
            engine.render("entity/missing.java.j2", BINDINGS)
        assert exc.value.template_name == "entity/missing.java.j2"
        assert exc.value.searched == [override_dir, builtin_dir]

    def test_syntax_error(self, builtin_dir):
        _write(builtin_dir, "broken.j2", "{% if class_name %}unclosed\n")
        engine = TemplateEngine(builtin_dir)
        with pytest.raises(TemplateSyntaxError) as exc:
            engine.render("broken.j2", BINDINGS)
        assert exc.value.template_name == "broken.j2"

    def test_unbound_placeholder(self, builtin_dir):
        _write(builtin_dir, "unbound.j2", "{{ table_name }}\n")
        engine = TemplateEngine(builtin_dir)
        with pytest.raises(UnboundPlaceholder) as exc:
            engine.render("unbound.j2", BINDINGS)
        assert "table_name" in exc.value.detail

    def test_errors_share_base_class(self, builtin_dir):
        engine = TemplateEngine(builtin_dir)
        with pytest.raises(TemplateError):
            engine.render("nope.j2", BINDINGS)


class TestContext:
    def test_mapping_bindings(self, builtin_dir):
        engine = TemplateEngine(builtin_dir)
        assert engine.render_string("{{ name | snake_case }}", {"name": "BlogPost"}) == "blog_post"

    def test_filters(self, builtin_dir):
        engine = TemplateEngine(builtin_dir)
        rendered = engine.render_string(
            "{{ n | camel_case }} {{ n | kebab_case }} {{ n | plural }}", {"n": "BlogPost"}
        )
        assert rendered == "blogPost blog-post BlogPosts"

    def test_unsupported_bindings_type(self):
        with pytest.raises(TypeError):
            bindings_to_context(["not", "a", "mapping"])

    def test_dataclass_flattened_one_level(self):
        assert bindings_to_context(BINDINGS) == {"class_name": "BlogPost", "package": "com.example"}
