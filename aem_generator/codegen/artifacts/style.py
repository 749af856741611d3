"""
Style artifact: the SCSS stylesheet of the component.
"""

from typing import Dict

from ..core.generator import ArtifactRenderer, RenderContext, register_renderer
from ..core.naming import NamingVariants
from ..core.schema import ArtifactKind

GENERIC_STYLE = "style/_generic.scss.j2"

# Component type key -> stylesheet template
STYLE_LAYOUTS: Dict[str, str] = {
    "text-component": "style/text-component.scss.j2",
    "image-component": "style/image-component.scss.j2",
    "button-component": "style/button-component.scss.j2",
    "container-component": "style/container-component.scss.j2",
    "hero-component": "style/hero-component.scss.j2",
    "card-component": "style/card-component.scss.j2",
}


@register_renderer
class StyleRenderer(ArtifactRenderer):
    """Renders the component stylesheet."""

    kind = ArtifactKind.STYLE

    @classmethod
    def filename(cls, names: NamingVariants) -> str:
        return f"{names.kebab_case}.scss"

    def layout_for(self, type_key: str) -> str:
        return STYLE_LAYOUTS.get(type_key, GENERIC_STYLE)

    def render(self, ctx: RenderContext) -> str:
        return self.render_template(
            self.layout_for(ctx.spec.key), ctx.base_template_context()
        )
