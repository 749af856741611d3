"""Shared fixtures for the generator test suite."""

import io

import pytest
from rich.console import Console

from aem_generator.codegen import (
    ComponentGenerator,
    ComponentTypeSpec,
    FieldDescriptor,
    FieldKind,
    GenerationRequest,
    GeneratorConfig,
    get_component_type,
)


@pytest.fixture
def config():
    """Default configuration, independent of any config file."""
    return GeneratorConfig()


@pytest.fixture
def generator(config):
    return ComponentGenerator(config)


@pytest.fixture
def button_spec():
    return get_component_type("button-component")


@pytest.fixture
def make_request():
    """Factory for requests with sensible identity defaults."""

    def factory(component_type="button-component", display_name="Call To Action", **kwargs):
        kwargs.setdefault("package_identifier", "com.example.aem.core")
        kwargs.setdefault("project_identifier", "myproject")
        kwargs.setdefault("field_values", {})
        return GenerationRequest(
            component_type=component_type, display_name=display_name, **kwargs
        )

    return factory


@pytest.fixture
def cta_request(make_request):
    """The call-to-action button used across end-to-end tests."""
    return make_request(field_values={"text": "Buy Now", "url": "/content/x"})


@pytest.fixture
def quote_spec():
    """A type without dedicated layouts, exercising the generic templates."""
    return ComponentTypeSpec(
        key="pull-quote",
        title="Pull Quote",
        description="Highlighted quotation",
        category="Content",
        icon="💬",
        fields=(
            FieldDescriptor("quote", FieldKind.TEXTAREA, "Quote", required=True),
            FieldDescriptor("authorName", FieldKind.TEXT, "Author"),
            FieldDescriptor("featured", FieldKind.CHECKBOX, "Featured", default=True),
            FieldDescriptor("accent", FieldKind.COLORFIELD, "Accent Color"),
            FieldDescriptor("source", FieldKind.PATHFIELD, "Source"),
        ),
        empty_when=("quote",),
        elements=("quote", "authorName"),
    )


@pytest.fixture
def console_output(monkeypatch):
    """Route the CLI console into a buffer and return the buffer."""
    from aem_generator import cli

    buffer = io.StringIO()
    monkeypatch.setattr(
        cli, "console", Console(file=buffer, width=200, color_system=None)
    )
    return buffer
