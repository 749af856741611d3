"""
Tests for request validation and the refusal path of preview/generate.
"""

from unittest.mock import patch

import pytest

from aem_generator.codegen import (
    ComponentTypeSpec,
    FieldDescriptor,
    FieldKind,
    get_component_type,
    preview,
    validate,
)
from aem_generator.codegen.pipeline import (
    DISPLAY_NAME,
    PACKAGE_IDENTIFIER,
    PROJECT_IDENTIFIER,
    FieldError,
    ValidationResult,
)


def _messages(result):
    return {(e.field, e.message) for e in result.errors}


class TestRequestRules:
    """Tests for the display name, package and project rules."""

    def test_valid_request(self, cta_request, button_spec):
        result = validate(cta_request, button_spec)
        assert result.ok
        assert result.errors == ()

    def test_blank_display_name_stops_at_first_rule(self, cta_request, button_spec):
        """Test that a blank name reports only the required rule."""
        result = validate(cta_request.with_changes(display_name="   "), button_spec)
        assert _messages(result) == {(DISPLAY_NAME, "Component name is required")}

    @pytest.mark.parametrize("name", ["1 Hero", "Hero-Banner", "Hero!"])
    def test_display_name_pattern(self, cta_request, button_spec, name):
        result = validate(cta_request.with_changes(display_name=name), button_spec)
        assert result.errors_for(DISPLAY_NAME)[0].message == (
            "Component name must start with a letter and contain only letters, "
            "numbers, and spaces"
        )

    @pytest.mark.parametrize("package", ["Com.Example", "com..example", "com.example.", "1com"])
    def test_package_pattern(self, cta_request, button_spec, package):
        result = validate(cta_request.with_changes(package_identifier=package), button_spec)
        assert _messages(result) == {
            (PACKAGE_IDENTIFIER, "Package name must be a valid Java package")
        }

    @pytest.mark.parametrize("project", ["My-Project", "my_project", "1site"])
    def test_project_pattern(self, cta_request, button_spec, project):
        result = validate(cta_request.with_changes(project_identifier=project), button_spec)
        assert _messages(result) == {
            (
                PROJECT_IDENTIFIER,
                "Project name must be lowercase and contain only letters and numbers",
            )
        }

    def test_blank_identifiers(self, cta_request, button_spec):
        request = cta_request.with_changes(package_identifier="", project_identifier="")
        assert _messages(validate(request, button_spec)) == {
            (PACKAGE_IDENTIFIER, "Package name is required"),
            (PROJECT_IDENTIFIER, "Project name is required"),
        }


class TestFieldRules:
    """Tests for required fields and kind value rules."""

    def test_blank_required_field(self, cta_request, button_spec):
        """Test the blank button text case: one error attributed to text."""
        request = cta_request.with_changes(field_values={"text": "  ", "url": "/content/x"})
        result = validate(request, button_spec)
        assert len(result.errors) == 1
        assert result.errors[0] == FieldError("text", "Button Text is required")

    def test_errors_accumulate_across_inputs(self, cta_request, button_spec):
        request = cta_request.with_changes(display_name="", field_values={})
        result = validate(request, button_spec)
        assert [e.field for e in result.errors] == [DISPLAY_NAME, "text"]

    def test_select_value_must_be_an_option(self, cta_request, button_spec):
        request = cta_request.with_changes(field_values={"text": "Go", "size": "huge"})
        assert _messages(validate(request, button_spec)) == {
            ("size", "Size must be one of: small, medium, large")
        }

    def test_colorfield_value(self, make_request):
        container = get_component_type("container-component")
        request = make_request(
            "container-component", "Section", field_values={"backgroundColor": "blue"}
        )
        assert _messages(validate(request, container)) == {
            ("backgroundColor", "Background Color must be a hex color such as #3B82F6")
        }

    def test_checkbox_value(self, make_request):
        spec = ComponentTypeSpec(
            key="teaser",
            title="Teaser",
            description="",
            category="Content",
            icon="",
            fields=(FieldDescriptor("featured", FieldKind.CHECKBOX, "Featured"),),
        )
        request = make_request("teaser", "Teaser", field_values={"featured": "maybe"})
        assert _messages(validate(request, spec)) == {
            ("featured", "Featured must be a boolean value")
        }

    def test_required_field_satisfied_by_default(self, make_request):
        spec = ComponentTypeSpec(
            key="notice",
            title="Notice",
            description="",
            category="Content",
            icon="",
            fields=(
                FieldDescriptor(
                    "level", FieldKind.SELECT, "Level", required=True, options=("info", "warn")
                ),
                FieldDescriptor("message", FieldKind.TEXT, "Message", required=True, default="Hi"),
            ),
        )
        assert validate(make_request("notice", "Notice"), spec).errors_for("message") == []

    def test_required_checkbox_accepts_unchecked(self, make_request):
        """Test that false is a value, so a required checkbox never fails."""
        spec = ComponentTypeSpec(
            key="consent",
            title="Consent",
            description="",
            category="Interactive",
            icon="",
            fields=(FieldDescriptor("agree", FieldKind.CHECKBOX, "Agree", required=True),),
        )
        for values in ({}, {"agree": False}, {"agree": "off"}, {"agree": ""}):
            request = make_request("consent", "Consent", field_values=values)
            assert validate(request, spec).ok, values

    def test_unknown_field_keys_are_ignored(self, cta_request, button_spec):
        request = cta_request.with_changes(
            field_values={**cta_request.field_values, "bogus": "x"}
        )
        assert validate(request, button_spec).ok


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_to_dict(self):
        result = ValidationResult((FieldError("text", "Button Text is required"),))
        assert result.to_dict() == {
            "ok": False,
            "errors": [{"field": "text", "message": "Button Text is required"}],
        }


class TestRefusal:
    """Tests that refused requests never reach the renderer."""

    def test_preview_does_not_render_invalid_request(self, cta_request):
        request = cta_request.with_changes(field_values={"text": ""})
        with patch("aem_generator.codegen.pipeline.ComponentGenerator") as generator_class:
            result = preview(request)

        generator_class.assert_not_called()
        assert not result.success
        assert result.artifacts == {}
        assert [e.field for e in result.errors] == ["text"]
        assert result.metadata == {"mode": "preview", "component_type": "button-component"}
