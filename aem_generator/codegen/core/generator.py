"""
Base renderer interface and the rendering engine.

Each artifact kind has one renderer; the engine runs the enabled renderers
in fixed order and applies the final placeholder substitution pass.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import RenderError, SchemaError
from .naming import NamingVariants, bean_property, get_java_sanitizer, to_kebab
from .schema import (
    ArtifactKind,
    ComponentTypeSpec,
    FieldDescriptor,
    FieldKind,
    FieldValue,
    GenerationRequest,
    is_blank,
)
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)

ArtifactMap = Dict[str, str]

# Template attribute -> placeholder token name
PLACEHOLDER_NAMES = {
    "package": "componentPackage",
    "project": "projectName",
    "name": "componentName",
    "camel": "camelCase",
    "pascal": "pascalCase",
    "kebab": "kebabCase",
    "snake": "snakeCase",
    "constant": "constantCase",
}

PLACEHOLDER_TOKENS = {attr: "{{%s}}" % token for attr, token in PLACEHOLDER_NAMES.items()}

_TOKEN_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")

# Private-use stand-ins keeping authored braces out of the placeholder pass
_BRACE_SHIELDS = (("{", "\ue000"), ("}", "\ue001"))


def shield_value(value: FieldValue) -> FieldValue:
    """Hide the braces of an authored string value from placeholder substitution."""
    if not isinstance(value, str):
        return value
    for brace, shield in _BRACE_SHIELDS:
        value = value.replace(brace, shield)
    return value


def unshield_text(text: str) -> str:
    """Restore authored braces hidden by shield_value()."""
    for brace, shield in _BRACE_SHIELDS:
        text = text.replace(shield, brace)
    return text


@dataclass(frozen=True)
class FieldView:
    """Template-facing view of one field with its bound value."""

    descriptor: FieldDescriptor
    value: FieldValue
    member: str
    accessor: str
    element: str

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def kind(self) -> str:
        return self.descriptor.kind.value

    @property
    def label(self) -> str:
        return self.descriptor.label

    @property
    def required(self) -> bool:
        return self.descriptor.required

    @property
    def options(self) -> tuple:
        return self.descriptor.options

    @property
    def fallback(self) -> Optional[FieldValue]:
        return self.descriptor.fallback

    @property
    def is_blank(self) -> bool:
        if self.descriptor.kind == FieldKind.CHECKBOX:
            return not self.value
        return is_blank(self.value)

    @property
    def property(self) -> str:
        """HTL property name resolving to the accessor."""
        return bean_property(self.accessor)


@dataclass
class RenderContext:
    """Everything a renderer needs for one request."""

    request: GenerationRequest
    spec: ComponentTypeSpec
    names: NamingVariants
    config: GeneratorConfig
    values: Dict[str, FieldValue]
    fields: List[FieldView]
    generated_at: Optional[str] = None
    derived: Dict[str, Any] = field(default_factory=dict)

    @property
    def field_map(self) -> Dict[str, FieldView]:
        return {f.name: f for f in self.fields}

    def base_template_context(self) -> Dict[str, Any]:
        """Variables shared by every artifact template."""
        return {
            "t": PLACEHOLDER_TOKENS,
            "spec": self.spec,
            "fields": self.field_map,
            "field_list": self.fields,
            "config": self.config,
            "generated_at": self.generated_at,
            "artifact_files": artifact_filenames(self.names, self.request.enabled_artifacts),
        }


class ArtifactRenderer(ABC):
    """Abstract base class for all artifact renderers."""

    # Artifact kind produced by this renderer
    kind: ArtifactKind

    def __init__(self, engine: TemplateEngine):
        self.engine = engine

    @classmethod
    @abstractmethod
    def filename(cls, names: NamingVariants) -> str:
        """Artifact filename for a component."""
        pass

    @abstractmethod
    def render(self, ctx: RenderContext) -> str:
        """Render the artifact text, placeholders still unresolved."""
        pass

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.engine.render_template(template_name, context)

    def format_artifact(self, text: str) -> str:
        """
        Apply basic cleanup to rendered text.

        Strips trailing whitespace, collapses runs of blank lines and ends
        the artifact with exactly one newline.
        """
        formatted_lines = []
        blank_count = 0

        for line in text.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"


# Filled by the artifacts package; kind -> renderer class
_RENDERERS: Dict[ArtifactKind, Type[ArtifactRenderer]] = {}


def register_renderer(renderer_class: Type[ArtifactRenderer]) -> Type[ArtifactRenderer]:
    """Class decorator registering a renderer for its artifact kind."""
    kind = getattr(renderer_class, "kind", None)
    if not isinstance(kind, ArtifactKind):
        raise SchemaError(f"Renderer {renderer_class.__name__} declares no artifact kind")
    _RENDERERS[kind] = renderer_class
    return renderer_class


def get_renderer_class(kind: ArtifactKind) -> Type[ArtifactRenderer]:
    """Look up the renderer for an artifact kind."""
    # importing the package registers the built-in renderers
    from .. import artifacts  # noqa: F401

    try:
        return _RENDERERS[kind]
    except KeyError:
        raise SchemaError(f"No renderer registered for artifact kind: {kind.value}")


def artifact_filenames(
    names: NamingVariants, kinds: Optional[List[ArtifactKind]] = None
) -> Dict[ArtifactKind, str]:
    """Filenames of the given artifact kinds (all kinds by default)."""
    kinds = kinds if kinds is not None else ArtifactKind.ordered()
    return {kind: get_renderer_class(kind).filename(names) for kind in kinds}


def substitute_placeholders(
    text: str, request: GenerationRequest, names: NamingVariants
) -> str:
    """
    Replace every placeholder token in an artifact.

    Raises:
        RenderError: If a token remains unresolved
    """
    values = {
        "componentPackage": request.package_identifier,
        "projectName": request.project_identifier,
        "componentName": request.display_name,
        "camelCase": names.camel_case,
        "pascalCase": names.pascal_case,
        "kebabCase": names.kebab_case,
        "snakeCase": names.snake_case,
        "constantCase": names.constant_case,
    }

    def replace_token(match: "re.Match[str]") -> str:
        token = match.group(1)
        if token in values:
            return values[token]
        return match.group(0)

    result = _TOKEN_PATTERN.sub(replace_token, text)

    unresolved = sorted(set(_TOKEN_PATTERN.findall(result)))
    if unresolved:
        raise RenderError(f"Unresolved placeholders: {', '.join(unresolved)}")

    return result


class ComponentGenerator:
    """Renders the artifact map for a generation request."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        template_dir = Path(self.config.template_dir) if self.config.template_dir else None
        self.engine = create_template_engine(template_dir)
        self.sanitizer = get_java_sanitizer()
        self._renderers: Dict[ArtifactKind, ArtifactRenderer] = {}

    def renderer(self, kind: ArtifactKind) -> ArtifactRenderer:
        """Get (and cache) the renderer instance for an artifact kind."""
        if kind not in self._renderers:
            self._renderers[kind] = get_renderer_class(kind)(self.engine)
        return self._renderers[kind]

    def build_context(
        self, request: GenerationRequest, spec: ComponentTypeSpec, names: NamingVariants
    ) -> RenderContext:
        """Bind values and build the render context."""
        from ..artifacts.logic import derived_accessors, evaluate_derived

        derived_names = [accessor.name for accessor in derived_accessors(spec)]
        values = {
            name: shield_value(value)
            for name, value in spec.bind_values(request.field_values).items()
        }
        views = [
            FieldView(
                descriptor=descriptor,
                value=values[descriptor.name],
                member=self.sanitizer.sanitize_name(descriptor.name),
                accessor=self.sanitizer.accessor_name(
                    descriptor.name,
                    boolean=descriptor.kind == FieldKind.CHECKBOX,
                    reserved=derived_names,
                ),
                element=to_kebab(descriptor.name),
            )
            for descriptor in spec.fields
        ]

        generated_at = None
        if self.config.include_timestamp:
            generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")

        ctx = RenderContext(
            request=request,
            spec=spec,
            names=names,
            config=self.config,
            values=values,
            fields=views,
            generated_at=generated_at,
        )

        ctx.derived = evaluate_derived(spec, values)
        return ctx

    def render(
        self, request: GenerationRequest, spec: ComponentTypeSpec, names: NamingVariants
    ) -> ArtifactMap:
        """
        Render all enabled artifacts.

        Args:
            request: Generation request
            spec: Component type spec the request refers to
            names: Naming variants of the request's display name

        Returns:
            Ordered mapping of filename to artifact text

        Raises:
            RenderError: On type mismatch, missing required values or
                unresolved placeholders
        """
        if request.component_type != spec.key:
            raise RenderError(
                f"Request component type '{request.component_type}' "
                f"does not match spec '{spec.key}'"
            )

        if names.is_empty:
            raise RenderError("Display name yields an empty component name")

        ctx = self.build_context(request, spec, names)

        missing = [f.name for f in spec.required_fields if is_blank(ctx.values[f.name])]
        if missing:
            raise RenderError(f"Missing values for required fields: {', '.join(missing)}")

        artifacts: ArtifactMap = {}
        for kind in ArtifactKind.ordered():
            if not request.is_enabled(kind):
                logger.debug("Skipping disabled artifact %s", kind.value)
                continue

            renderer = self.renderer(kind)
            filename = renderer.filename(names)
            if filename in artifacts:
                raise RenderError(f"Artifact filename collision: {filename}")

            text = renderer.format_artifact(renderer.render(ctx))
            # tokens resolve in template text only; authored values pass through
            artifacts[filename] = unshield_text(substitute_placeholders(text, request, names))
            logger.debug("Rendered %s (%d chars)", filename, len(artifacts[filename]))

        logger.info(
            "Rendered %d artifact(s) for %s '%s'",
            len(artifacts),
            spec.key,
            request.display_name,
        )
        return artifacts


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        artifacts: Optional[ArtifactMap] = None,
        errors: Optional[List[Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            artifacts: Rendered artifact map
            errors: Validation errors, when generation was refused
            metadata: Additional metadata about generation
        """
        self.artifacts: ArtifactMap = dict(artifacts or {})
        self.errors = list(errors or [])
        self.metadata: Dict[str, Any] = dict(metadata or {})

    @property
    def success(self) -> bool:
        return not self.errors

    @classmethod
    def invalid(cls, errors: List[Any], metadata: Mapping[str, Any] = None) -> "GenerationResult":
        """Create a result for a request that failed validation."""
        return cls(errors=errors, metadata=dict(metadata or {}))


def render(
    request: GenerationRequest,
    spec: ComponentTypeSpec,
    names: NamingVariants,
    config: Optional[GeneratorConfig] = None,
) -> ArtifactMap:
    """Render the artifact map for a request with a fresh generator."""
    return ComponentGenerator(config).render(request, spec, names)
