"""
Markup artifact: the HTL template of the component.
"""

from typing import Dict

from ..core.errors import SchemaError
from ..core.generator import ArtifactRenderer, RenderContext, register_renderer
from ..core.naming import NamingVariants
from ..core.schema import ArtifactKind, FieldKind

GENERIC_LAYOUT = "markup/_generic.html.j2"

# Component type key -> layout template
MARKUP_LAYOUTS: Dict[str, str] = {
    "text-component": "markup/text-component.html.j2",
    "image-component": "markup/image-component.html.j2",
    "button-component": "markup/button-component.html.j2",
    "container-component": "markup/container-component.html.j2",
    "hero-component": "markup/hero-component.html.j2",
    "card-component": "markup/card-component.html.j2",
}

# Field kind -> block macro in markup/_blocks.html.j2
MARKUP_BLOCKS: Dict[FieldKind, str] = {
    FieldKind.TEXT: "text_block",
    FieldKind.TEXTAREA: "paragraph_block",
    FieldKind.RICHTEXT: "rich_block",
    FieldKind.SELECT: "text_block",
    FieldKind.CHECKBOX: "flag_block",
    FieldKind.IMAGE: "image_block",
    FieldKind.PATHFIELD: "link_block",
    FieldKind.COLORFIELD: "color_block",
}


def block_for(kind: FieldKind) -> str:
    """Look up the markup block macro for a field kind."""
    try:
        return MARKUP_BLOCKS[kind]
    except KeyError:
        raise SchemaError(f"No markup block for field kind: {kind.value}")


@register_renderer
class MarkupRenderer(ArtifactRenderer):
    """Renders the HTL template."""

    kind = ArtifactKind.MARKUP

    @classmethod
    def filename(cls, names: NamingVariants) -> str:
        return f"{names.kebab_case}.html"

    def layout_for(self, type_key: str) -> str:
        """Dedicated layout of a type, or the generic one-block-per-field layout."""
        return MARKUP_LAYOUTS.get(type_key, GENERIC_LAYOUT)

    def render(self, ctx: RenderContext) -> str:
        context = ctx.base_template_context()
        context["block_names"] = {f.name: block_for(f.descriptor.kind) for f in ctx.fields}
        return self.render_template(self.layout_for(ctx.spec.key), context)
