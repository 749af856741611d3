"""
Tests for the Jinja2 template engine wrapper.
"""

import pytest

from aem_generator.codegen.core.templates import (
    DEFAULT_TEMPLATE_DIR,
    TemplateEngine,
    TemplateError,
    create_template_engine,
    get_default_template_engine,
    java_string_literal,
)


class TestJavaStringLiteral:
    """Tests for java_string_literal()."""

    def test_quotes_and_escapes(self):
        assert java_string_literal('say "hi"\n') == '"say \\"hi\\"\\n"'
        assert java_string_literal("C:\\path") == '"C:\\\\path"'

    def test_null_and_booleans(self):
        assert java_string_literal(None) == "null"
        assert java_string_literal(True) == "true"
        assert java_string_literal(False) == "false"


class TestTemplateEngine:
    """Tests for TemplateEngine."""

    def test_missing_template_dir(self, tmp_path):
        with pytest.raises(TemplateError, match="Template directory not found"):
            TemplateEngine(tmp_path / "nowhere")

    def test_bundled_templates_exist(self):
        engine = get_default_template_engine()
        assert engine.template_dir == DEFAULT_TEMPLATE_DIR
        assert (DEFAULT_TEMPLATE_DIR / "logic" / "model.java.j2").is_file()
        assert (DEFAULT_TEMPLATE_DIR / "dialog" / "content.xml.j2").is_file()

    def test_default_engine_is_reused(self):
        assert create_template_engine() is get_default_template_engine()

    def test_filters(self, tmp_path):
        (tmp_path / "filters.txt.j2").write_text(
            "{{ a | java_string }} {{ b | upper_first }} {{ c | kebab_case }}", encoding="utf-8"
        )
        rendered = create_template_engine(tmp_path).render_template(
            "filters.txt.j2", {"a": 'x"y', "b": "primary", "c": "backgroundImage"}
        )
        assert rendered == '"x\\"y" Primary background-image'

    def test_undefined_variables_fail(self, tmp_path):
        (tmp_path / "undefined.txt.j2").write_text("{{ missing }}", encoding="utf-8")
        with pytest.raises(TemplateError, match="Failed to render template undefined.txt.j2"):
            create_template_engine(tmp_path).render_template("undefined.txt.j2", {})

    def test_missing_template(self):
        with pytest.raises(TemplateError, match="Template not found"):
            get_default_template_engine().render_template("markup/missing.html.j2", {})

    def test_custom_template_dir(self, tmp_path):
        """Test that markup templates in a custom directory are autoescaped."""
        (tmp_path / "markup").mkdir()
        (tmp_path / "markup" / "sample.html.j2").write_text("<p>{{ value }}</p>", encoding="utf-8")
        (tmp_path / "sample.md.j2").write_text("{{ value }}", encoding="utf-8")

        engine = create_template_engine(tmp_path)
        assert engine.render_template("markup/sample.html.j2", {"value": "<b>"}) == "<p>&lt;b&gt;</p>"
        assert engine.render_template("sample.md.j2", {"value": "<b>"}) == "<b>"
