"""
AEM component code generation.

Renders the HTL template, Sling Model, dialog, stylesheet and README of an
AEM component from a component type and authored field values.
"""

from .catalog import CATALOG_VERSION
from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.errors import GeneratorError, RenderError, SchemaError, ValidationError
from .core.generator import ComponentGenerator, GenerationResult, render
from .core.naming import NamingVariants, normalize, suggest_project_identifier
from .core.schema import (
    ArtifactKind,
    ComponentTypeSpec,
    FieldDescriptor,
    FieldKind,
    GenerationRequest,
)
from .pipeline import (
    FieldError,
    ValidationResult,
    bundle_artifacts,
    generate,
    preview,
    validate,
)
from .registry import (
    ComponentTypeRegistry,
    RegistryError,
    build_form_schema,
    get_component_type,
    get_registry,
    list_categories,
    list_component_types,
)

__all__ = [
    "CATALOG_VERSION",
    # Delivery surface operations
    "list_component_types",
    "list_categories",
    "build_form_schema",
    "validate",
    "render",
    "preview",
    "generate",
    "normalize",
    "bundle_artifacts",
    "suggest_project_identifier",
    # Data model
    "ArtifactKind",
    "ComponentTypeSpec",
    "FieldDescriptor",
    "FieldKind",
    "GenerationRequest",
    "GenerationResult",
    "NamingVariants",
    "FieldError",
    "ValidationResult",
    # Registry
    "ComponentTypeRegistry",
    "RegistryError",
    "get_component_type",
    "get_registry",
    # Engine and configuration
    "ComponentGenerator",
    "ConfigManager",
    "GeneratorConfig",
    "load_config",
    # Errors
    "GeneratorError",
    "RenderError",
    "SchemaError",
    "ValidationError",
]
