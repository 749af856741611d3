"""
Docs artifact: the component README.
"""

from ..core.generator import ArtifactRenderer, RenderContext, register_renderer
from ..core.naming import NamingVariants
from ..core.schema import ArtifactKind

# What each generated file is for, keyed by artifact kind
FILE_ROLES = {
    ArtifactKind.MARKUP.value: "HTL template for rendering",
    ArtifactKind.LOGIC.value: "Sling Model for business logic",
    ArtifactKind.SCHEMA.value: "Touch UI dialog configuration",
    ArtifactKind.STYLE.value: "Component-specific styles",
    ArtifactKind.DOCS.value: "This documentation file",
}


@register_renderer
class DocsRenderer(ArtifactRenderer):
    """Renders the README."""

    kind = ArtifactKind.DOCS
    template_name = "docs/README.md.j2"

    @classmethod
    def filename(cls, names: NamingVariants) -> str:
        return "README.md"

    def render(self, ctx: RenderContext) -> str:
        context = ctx.base_template_context()
        context["file_roles"] = FILE_ROLES
        return self.render_template(self.template_name, context)
