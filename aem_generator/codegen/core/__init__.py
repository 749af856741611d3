"""
Core component generation pieces.

Provides the schema model, naming, configuration, templates and the
rendering engine shared by every artifact renderer.
"""

from .errors import GeneratorError, RenderError, SchemaError, ValidationError
from .generator import (
    ArtifactMap,
    ArtifactRenderer,
    ComponentGenerator,
    GenerationResult,
    RenderContext,
    artifact_filenames,
    register_renderer,
    render,
    substitute_placeholders,
)
from .schema import (
    ArtifactKind,
    ComponentTypeSpec,
    FieldDescriptor,
    FieldKind,
    GenerationRequest,
)
from .naming import (
    NameSanitizer,
    NamingCase,
    NamingVariants,
    normalize,
    suggest_project_identifier,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Errors
    "GeneratorError",
    "SchemaError",
    "RenderError",
    "ValidationError",
    # Rendering engine
    "ArtifactMap",
    "ArtifactRenderer",
    "ComponentGenerator",
    "GenerationResult",
    "RenderContext",
    "artifact_filenames",
    "register_renderer",
    "render",
    "substitute_placeholders",
    # Schema system
    "ArtifactKind",
    "ComponentTypeSpec",
    "FieldDescriptor",
    "FieldKind",
    "GenerationRequest",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    "NamingVariants",
    "normalize",
    "suggest_project_identifier",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
