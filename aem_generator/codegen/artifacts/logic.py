"""
Logic artifact: the Java Sling Model behind the component.

Accessor bodies come from a per-kind table; type-specific derived accessors
come from a per-type table and are also evaluated against the bound values.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Tuple

from ...logging_config import get_logger
from ..core.errors import SchemaError
from ..core.generator import ArtifactRenderer, FieldView, RenderContext, register_renderer
from ..core.naming import NamingVariants, get_java_sanitizer
from ..core.schema import ArtifactKind, ComponentTypeSpec, FieldKind, FieldValue, is_blank
from ..core.templates import java_string_literal

logger = get_logger(__name__)

BoundValues = Mapping[str, FieldValue]


@dataclass(frozen=True)
class AccessorBody:
    """Java member type and accessor statements for one field."""

    java_type: str
    body: Tuple[str, ...]


def _value_or_null(view: FieldView) -> AccessorBody:
    member = view.member
    return AccessorBody(
        "String", (f"return StringUtils.isNotBlank({member}) ? {member} : null;",)
    )


def _value_or_default(view: FieldView) -> AccessorBody:
    member = view.member
    fallback = java_string_literal(view.fallback)
    return AccessorBody(
        "String", (f"return StringUtils.isNotBlank({member}) ? {member} : {fallback};",)
    )


def _flag(view: FieldView) -> AccessorBody:
    return AccessorBody("boolean", (f"return {view.member};",))


# Field kind -> accessor builder
ACCESSOR_BUILDERS: Dict[FieldKind, Callable[[FieldView], AccessorBody]] = {
    FieldKind.TEXT: _value_or_null,
    FieldKind.TEXTAREA: _value_or_null,
    FieldKind.RICHTEXT: _value_or_null,
    FieldKind.SELECT: _value_or_default,
    FieldKind.CHECKBOX: _flag,
    FieldKind.IMAGE: _value_or_null,
    FieldKind.PATHFIELD: _value_or_null,
    FieldKind.COLORFIELD: _value_or_null,
}


def accessor_body(view: FieldView) -> AccessorBody:
    """Look up the accessor body for a field by its kind."""
    try:
        builder = ACCESSOR_BUILDERS[view.descriptor.kind]
    except KeyError:
        raise SchemaError(f"No logic accessor for field kind: {view.kind}")
    return builder(view)


@dataclass(frozen=True)
class DerivedAccessor:
    """A type-specific accessor computed from other fields."""

    name: str
    return_type: str
    summary: str
    returns: str
    body: Tuple[str, ...]
    evaluate: Callable[[BoundValues], Any]


def _getter(field_name: str) -> str:
    return get_java_sanitizer().accessor_name(field_name)


def _text(values: BoundValues, field_name: str) -> str:
    value = values.get(field_name)
    return "" if is_blank(value) else str(value)


def _has_asset(name: str, field_name: str) -> DerivedAccessor:
    return DerivedAccessor(
        name=name,
        return_type="boolean",
        summary="Checks if the component has a valid image",
        returns="true if image is present, false otherwise",
        body=(f"return StringUtils.isNotBlank({_getter(field_name)}());",),
        evaluate=lambda values: bool(_text(values, field_name)),
    )


def _asset_src(name: str, field_name: str, summary: str) -> DerivedAccessor:
    return DerivedAccessor(
        name=name,
        return_type="String",
        summary=summary,
        returns="the image source URL, or null when no image is set",
        body=(
            f"String imagePath = {_getter(field_name)}();",
            "if (StringUtils.isBlank(imagePath)) {",
            "    return null;",
            "}",
            "return imagePath;",
        ),
        evaluate=lambda values: _text(values, field_name) or None,
    )


def is_external_url(value: str) -> bool:
    """True for absolute http(s) URLs."""
    return value.startswith("http://") or value.startswith("https://")


def _external_link(field_name: str) -> DerivedAccessor:
    return DerivedAccessor(
        name="isExternalLink",
        return_type="boolean",
        summary="Checks if the link target is an external URL",
        returns="true if the link is external, false otherwise",
        body=(
            f"String link = {_getter(field_name)}();",
            "return StringUtils.isNotBlank(link)",
            '        && (link.startsWith("http://") || link.startsWith("https://"));',
        ),
        evaluate=lambda values: is_external_url(_text(values, field_name)),
    )


def _inline_styles(field_name: str) -> DerivedAccessor:
    getter = _getter(field_name)

    def evaluate(values: BoundValues):
        color = _text(values, field_name)
        return f"background-color: {color};" if color else None

    return DerivedAccessor(
        name="getInlineStyles",
        return_type="String",
        summary="Gets inline styles for the container",
        returns="CSS style string, or null when no style applies",
        body=(
            "StringBuilder styles = new StringBuilder();",
            f"if (StringUtils.isNotBlank({getter}())) {{",
            f'    styles.append("background-color: ").append({getter}()).append(";");',
            "}",
            "return styles.length() > 0 ? styles.toString() : null;",
        ),
        evaluate=evaluate,
    )


def _has_cta(text_field: str, url_field: str) -> DerivedAccessor:
    return DerivedAccessor(
        name="hasCta",
        return_type="boolean",
        summary="Checks if both call-to-action text and URL are set",
        returns="true if the call to action can be rendered",
        body=(
            f"return StringUtils.isNotBlank({_getter(text_field)}())",
            f"        && StringUtils.isNotBlank({_getter(url_field)}());",
        ),
        evaluate=lambda values: bool(_text(values, text_field) and _text(values, url_field)),
    )


def _alt_from(field_name: str) -> DerivedAccessor:
    getter = _getter(field_name)
    return DerivedAccessor(
        name="getImageAlt",
        return_type="String",
        summary="Gets the image alternative text, taken from the card title",
        returns="the alternative text, empty when no title is set",
        body=(f"return StringUtils.isNotBlank({getter}()) ? {getter}() : \"\";",),
        evaluate=lambda values: _text(values, field_name),
    )


# Component type key -> derived accessors
DERIVED_ACCESSORS: Dict[str, Callable[[], List[DerivedAccessor]]] = {
    "image-component": lambda: [
        _has_asset("hasImage", "image"),
        _asset_src("getImageSrc", "image", "Gets the processed image source URL"),
        _external_link("linkUrl"),
    ],
    "button-component": lambda: [_external_link("url")],
    "container-component": lambda: [_inline_styles("backgroundColor")],
    "hero-component": lambda: [
        _asset_src(
            "getBackgroundImageSrc",
            "backgroundImage",
            "Gets the processed background image source URL",
        ),
        _has_cta("ctaText", "ctaUrl"),
        _external_link("ctaUrl"),
    ],
    "card-component": lambda: [
        _has_asset("hasImage", "image"),
        _asset_src("getImageSrc", "image", "Gets the processed card image source URL"),
        _alt_from("title"),
        _external_link("link"),
    ],
}


def derived_accessors(spec: ComponentTypeSpec) -> List[DerivedAccessor]:
    """Derived accessors declared for a component type (none for other types)."""
    factory = DERIVED_ACCESSORS.get(spec.key)
    return factory() if factory else []


def evaluate_derived(spec: ComponentTypeSpec, values: BoundValues) -> Dict[str, Any]:
    """Evaluate every derived accessor of a type against bound values."""
    return {accessor.name: accessor.evaluate(values) for accessor in derived_accessors(spec)}


def _javadoc_safe(text: str) -> str:
    return str(text).replace("*/", "*&#47;")


def empty_check(spec: ComponentTypeSpec) -> str:
    """Java expression implementing the type's emptiness predicate."""
    if not spec.empty_when:
        return "false"

    sanitizer = get_java_sanitizer()
    clauses = []
    for name in spec.empty_when:
        member = sanitizer.sanitize_name(name)
        if spec.get_field(name).kind == FieldKind.CHECKBOX:
            clauses.append(f"!{member}")
        else:
            clauses.append(f"StringUtils.isBlank({member})")
    return "\n        && ".join(clauses)


@register_renderer
class LogicRenderer(ArtifactRenderer):
    """Renders the Sling Model class."""

    kind = ArtifactKind.LOGIC
    template_name = "logic/model.java.j2"

    @classmethod
    def filename(cls, names: NamingVariants) -> str:
        return f"{names.pascal_case}Model.java"

    def render(self, ctx: RenderContext) -> str:
        fields = []
        for view in ctx.fields:
            accessor = accessor_body(view)
            fields.append(
                {
                    "view": view,
                    "java_type": accessor.java_type,
                    "body": accessor.body,
                    "doc_label": _javadoc_safe(view.label.lower()),
                }
            )

        derived = []
        for accessor in derived_accessors(ctx.spec):
            derived.append(
                {
                    "accessor": accessor,
                    "current": _javadoc_safe(
                        java_string_literal(ctx.derived.get(accessor.name))
                    ),
                }
            )

        context = ctx.base_template_context()
        context.update(
            {
                "model_fields": fields,
                "derived": derived,
                "empty_check": empty_check(ctx.spec),
            }
        )
        logger.debug("Rendering Sling Model with %d derived accessor(s)", len(derived))
        return self.render_template(self.template_name, context)
