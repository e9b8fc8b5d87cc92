"""Unit tests for the Jinja2 template renderer (dfsol.scaffolder.templates).

Tests cover:
- listing the bundled templates
- rendering with a context, strict undefined variables
- custom template directories
- the quoted filter used for JSON and TOML string values
"""

from __future__ import annotations

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from dfsol.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


class TestBundledTemplates:
    def test_lists_program_templates(self):
        names = TemplateRenderer().list_templates("programs")

        assert "programs/basic/lib.rs.j2" in names
        assert "programs/multiple/instructions/initialize.rs.j2" in names
        assert names == sorted(names)

    def test_lists_everything_without_prefix(self):
        names = TemplateRenderer().list_templates()
        assert "workspace/Anchor.toml.j2" in names
        assert "tests/rust/Cargo.toml.j2" in names

    def test_unknown_prefix(self):
        assert TemplateRenderer().list_templates("nope") == []

    def test_missing_template(self):
        with pytest.raises(TemplateNotFound):
            TemplateRenderer().render("nope.j2", {})


class TestCustomDirectory:
    @pytest.fixture
    def renderer(self, tmp_path) -> TemplateRenderer:
        (tmp_path / "greeting.j2").write_text("hello {{ who }}\n")
        return TemplateRenderer(tmp_path)

    def test_render(self, renderer):
        assert renderer.render("greeting.j2", {"who": "anchor"}) == "hello anchor\n"

    def test_no_html_escaping(self, renderer):
        assert renderer.render("greeting.j2", {"who": "<&>"}) == "hello <&>\n"

    @pytest.mark.parametrize("value, rendered", [
        ("MIT", '"MIT"'),
        ('SEE "LICENSE"', '"SEE \\"LICENSE\\""'),
        ("C:\\keys\\id.json", '"C:\\\\keys\\\\id.json"'),
        ("Müller", '"Müller"'),
    ])
    def test_quoted_filter(self, tmp_path, value, rendered):
        (tmp_path / "quoted.j2").write_text("{{ value | quoted }}", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("quoted.j2", {"value": value}) == rendered

    def test_undefined_variable_raises(self, renderer):
        with pytest.raises(UndefinedError):
            renderer.render("greeting.j2", {})
