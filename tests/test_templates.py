"""Unit tests for the Jinja2 renderer and its filters (oneclick.templates)."""

from __future__ import annotations

from pathlib import Path

import pytest

from oneclick.models import CustomMethodSpec
from oneclick.templates import TemplateRenderer, default_return, php_literal, php_string

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class TestFilters:
    def test_php_string_escapes(self):
        assert php_string("title") == "'title'"
        assert php_string("it's") == "'it\\'s'"
        assert php_string("a\\b") == "'a\\\\b'"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (3, "3"),
            (1.5, "1.5"),
            ("42", "42"),
            ("-0.25", "-0.25"),
            ("draft", "'draft'"),
            ("", "''"),
        ],
    )
    def test_php_literal(self, value, expected):
        assert php_literal(value) == expected

    @pytest.mark.parametrize(
        "return_type, expected",
        [
            ("bool", "return false;"),
            ("array", "return [];"),
            ("Model", "return $this->model->first();"),
            ("Collection", "return $this->model->get();"),
            ("mixed", "return null;"),
        ],
    )
    def test_default_return(self, return_type, expected):
        assert default_return(return_type) == expected


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class TestRenderer:
    def test_filters_are_registered(self, tmp_path: Path):
        (tmp_path / "names.j2").write_text(
            "{{ name | snake_case }} {{ name | plural }} {{ name | kebab_case }}"
            " {{ 'x' | php_string }} {{ 'bool' | default_return }}",
            encoding="utf-8",
        )
        out = TemplateRenderer(tmp_path).render("names.j2", {"name": "BlogPost"})
        assert out == "blog_post BlogPosts blog-post 'x' return false;"

    def test_render_to_file(self, renderer: TemplateRenderer, tmp_path: Path):
        path = renderer.render_to_file(
            "model/model.php.j2", tmp_path / "Models" / "Post.php", {"entity": "Post"}
        )
        text = path.read_text(encoding="utf-8")
        assert "class Post extends Model" in text
        assert text.endswith("}\n")

    def test_custom_method_stub(self, renderer: TemplateRenderer):
        out = renderer.render(
            "repository/impl.php.j2",
            {
                "entity": "User",
                "methods": [
                    CustomMethodSpec(name="findByEmail", return_type="Model", params="string $email")
                ],
            },
        )
        assert (
            "    public function findByEmail(string $email): Model\n"
            "    {\n"
            "        // TODO: Implement findByEmail method\n"
            "        return $this->model->first();\n"
            "    }\n"
            "}\n"
        ) in out

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.j2").write_text("Hello {{ who | pascal_case }}", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("hello.j2", {"who": "blog_post"}) == "Hello BlogPost"
