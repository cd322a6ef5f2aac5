"""Tests for TemplateRenderer and its Go-specific filters."""

from __future__ import annotations

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from go_template_sh.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


class TestFilters:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("my-service", "myservice"), ("Orders_API", "ordersapi"), ("9lives", "app9lives")],
    )
    def test_go_package(self, renderer, value, expected):
        assert renderer.render_string("{{ v | go_package }}", {"v": value}) == expected

    def test_pretty_json(self, renderer):
        assert renderer.render_string("{{ v | pretty_json }}", {"v": {"a": 1}}) == '{\n  "a": 1\n}'

    def test_only_template_filters_registered(self, renderer):
        assert "pascal_case" not in renderer.env.filters
        assert "env_name" not in renderer.env.filters
        for name in ("go_package", "pretty_json"):
            assert any(
                name in path.read_text() for path in renderer.template_dir.rglob("*.j2")
            ), name


class TestRendering:
    def test_go_source_not_html_escaped(self, renderer):
        expr = 'fmt.Sprintf("%d <%s> & %q", c.App.Port, name, "x")'
        assert renderer.render_string("{{ v }}", {"v": expr}) == expr

    def test_pretty_json_quotes_survive(self, renderer):
        out = renderer.render_string("{{ v | pretty_json }}", {"v": {"url": "postgres://a&b"}})
        assert '"url": "postgres://a&b"' in out
        assert "&#34;" not in out

    def test_undefined_variable_raises(self, renderer):
        with pytest.raises(UndefinedError):
            renderer.render_string("{{ missing }}", {})

    def test_missing_template_raises(self, renderer):
        with pytest.raises(TemplateNotFound):
            renderer.render("go/nope.go.j2", {})

    def test_trailing_newline_kept(self, renderer, basic_context):
        assert renderer.render("go/go.mod.j2", basic_context).endswith(")\n")

    async def test_render_to_file_creates_parents(self, renderer, basic_context, tmp_path):
        out = await renderer.render_to_file("go/go.mod.j2", tmp_path / "a" / "b" / "go.mod", basic_context)
        assert out.read_text().startswith("module github.com/user/test-service\n")

    def test_custom_template_dir(self, tmp_path):
        (tmp_path / "x.j2").write_text("hi {{ name }}")
        assert TemplateRenderer(tmp_path).render("x.j2", {"name": "go"}) == "hi go"


class TestListTemplates:
    def test_lists_every_server_variant(self, renderer):
        servers = renderer.list_templates("go/server")
        assert servers == [
            f"go/server/server_{fw}.go.j2" for fw in sorted(["chi", "echo", "fiber", "gin", "stdlib"])
        ]

    def test_paths_use_forward_slashes(self, renderer):
        assert all("\\" not in path for path in renderer.list_templates())

    def test_unknown_prefix_is_empty(self, renderer):
        assert renderer.list_templates("nope") == []
