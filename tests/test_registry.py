"""
Tests for the component type registry and the built-in catalog.
"""

import pytest

from aem_generator.codegen import (
    CATALOG_VERSION,
    ComponentTypeRegistry,
    ComponentTypeSpec,
    FieldDescriptor,
    FieldKind,
    RegistryError,
    SchemaError,
    build_form_schema,
    get_registry,
    list_categories,
    list_component_types,
)

BUILTIN_KEYS = [
    "text-component",
    "image-component",
    "button-component",
    "container-component",
    "hero-component",
    "card-component",
]


def _spec(key="quote-block"):
    return ComponentTypeSpec(
        key=key,
        title="Quote",
        description="Quotation block",
        category="Content",
        icon="💬",
        fields=(FieldDescriptor("quote", FieldKind.TEXTAREA, "Quote", required=True),),
    )


class TestGlobalRegistry:
    """Tests for the registry built from the catalog."""

    def test_catalog_version(self):
        assert CATALOG_VERSION == "1.0.0"

    def test_builtin_types_in_catalog_order(self):
        assert [info["key"] for info in list_component_types()] == BUILTIN_KEYS

    def test_summaries_for_type_selection(self):
        """Test the summary fields offered to selection surfaces."""
        info = list_component_types()[0]
        assert set(info) == {"key", "title", "description", "category", "icon", "field_count"}
        assert info["title"] == "Text Component"
        assert info["field_count"] == 3

    def test_short_aliases(self):
        registry = get_registry()
        assert registry.get("button").key == "button-component"
        assert registry.get("HERO").key == "hero-component"
        assert registry.get_aliases("card-component") == ["card"]

    def test_unknown_type(self):
        """Test the error lists the available types."""
        with pytest.raises(RegistryError, match="Unknown component type: slider"):
            get_registry().get("slider")

    def test_registry_error_is_schema_error(self):
        with pytest.raises(SchemaError):
            build_form_schema("slider")

    def test_form_schema(self):
        """Test the form schema lists field descriptors in order."""
        schema = build_form_schema("button")
        assert schema["key"] == "button-component"
        assert [f["name"] for f in schema["fields"]] == ["text", "url", "style", "size"]
        assert schema["fields"][2] == {
            "name": "style",
            "kind": "select",
            "label": "Button Style",
            "required": False,
            "options": ["primary", "secondary", "outline"],
            "default": "primary",
        }

    def test_form_schema_envelope(self):
        """Test the type information wrapped around the field descriptors."""
        schema = build_form_schema("image")
        assert schema["aliases"] == ["image"]
        assert schema["required_fields"] == ["image", "alt"]
        assert schema["field_count"] == len(schema["fields"])


class TestTypeFiltering:
    """Tests for category and search filters of list_component_types()."""

    @staticmethod
    def _keys(**filters):
        return [info["key"] for info in list_component_types(**filters)]

    def test_category(self):
        assert self._keys(category="Content") == [
            "text-component",
            "hero-component",
            "card-component",
        ]

    def test_category_is_case_insensitive(self):
        assert self._keys(category="layout") == ["container-component"]

    def test_all_category(self):
        assert self._keys(category="all") == BUILTIN_KEYS

    def test_search_title_and_description(self):
        # "Image Component" by title, the hero by "with image and text overlay"
        assert self._keys(search="IMAGE") == ["image-component", "hero-component"]

    def test_filters_combine(self):
        assert self._keys(category="Content", search="image") == ["hero-component"]

    def test_no_match(self):
        assert self._keys(category="Media", search="button") == []

    def test_categories(self):
        assert list_categories() == ["Content", "Media", "Interactive", "Layout"]


class TestComponentTypeRegistry:
    """Tests for a private registry instance."""

    def test_register_and_get(self):
        registry = ComponentTypeRegistry()
        registry.register(_spec(), aliases=["quote"])
        assert registry.is_registered("quote")
        assert registry.get("quote").key == "quote-block"
        assert registry.list_keys() == ["quote-block"]

    def test_duplicate_registration_is_skipped(self):
        registry = ComponentTypeRegistry()
        first = _spec()
        registry.register(first)
        registry.register(
            ComponentTypeSpec(
                key="quote-block", title="Other", description="", category="", icon=""
            )
        )
        assert registry.get("quote-block") is first

    def test_replace(self):
        registry = ComponentTypeRegistry()
        registry.register(_spec())
        replacement = ComponentTypeSpec(
            key="quote-block", title="Other", description="", category="", icon=""
        )
        registry.register(replacement, replace=True)
        assert registry.get("quote-block") is replacement

    def test_alias_conflicts(self):
        registry = ComponentTypeRegistry()
        registry.register(_spec("quote-block"), aliases=["quote"])
        with pytest.raises(RegistryError, match="already points to"):
            registry.register(_spec("big-quote"), aliases=["quote"])
        with pytest.raises(RegistryError, match="conflicts with existing component type"):
            registry.register(_spec("other-quote"), aliases=["quote-block"])

    def test_rejects_non_specs(self):
        with pytest.raises(RegistryError):
            ComponentTypeRegistry().register({"key": "quote-block"})
