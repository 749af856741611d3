"""
Schema artifact: the Touch UI authoring dialog.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.errors import SchemaError
from ..core.generator import ArtifactRenderer, FieldView, RenderContext, register_renderer
from ..core.naming import NamingVariants
from ..core.schema import ArtifactKind, FieldKind

_NODE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(frozen=True)
class Widget:
    """Granite UI widget used for a field kind."""

    resource: str
    attributes: Tuple[Tuple[str, str], ...] = ()
    children: Optional[str] = None


# Field kind -> dialog widget
WIDGETS: Dict[FieldKind, Widget] = {
    FieldKind.TEXT: Widget("textfield"),
    FieldKind.TEXTAREA: Widget("textarea", (("rows", "{Long}4"),)),
    FieldKind.RICHTEXT: Widget(
        "rte", (("useFixedInlineToolbar", "{Boolean}true"),), children="rte_plugins"
    ),
    FieldKind.SELECT: Widget("select", children="select_items"),
    FieldKind.CHECKBOX: Widget(
        "checkbox", (("value", "{Boolean}true"), ("uncheckedValue", "{Boolean}false"))
    ),
    FieldKind.IMAGE: Widget(
        "fileupload",
        (
            ("allowUpload", "{Boolean}true"),
            ("autoStart", "{Boolean}false"),
            ("class", "cq-droptarget"),
            ("fileNameParameter", "./fileName"),
            ("fileReferenceParameter", "./fileReference"),
            (
                "mimeTypes",
                "[image/gif,image/jpeg,image/png,image/webp,image/tiff,image/svg+xml]",
            ),
            ("multiple", "{Boolean}false"),
        ),
    ),
    FieldKind.PATHFIELD: Widget("pathfield", (("rootPath", "/content"),)),
    FieldKind.COLORFIELD: Widget("colorfield", (("variant", "swatch"),)),
}


@dataclass(frozen=True)
class OptionNode:
    node: str
    value: str
    selected: bool


@dataclass(frozen=True)
class WidgetView:
    field: FieldView
    node: str
    resource: str
    attributes: Tuple[Tuple[str, str], ...]
    children: Optional[str]
    options: Tuple[OptionNode, ...]


def widget_for(kind: FieldKind) -> Widget:
    """Look up the dialog widget for a field kind."""
    try:
        return WIDGETS[kind]
    except KeyError:
        raise SchemaError(f"No dialog widget for field kind: {kind.value}")


def option_nodes(view: FieldView) -> Tuple[OptionNode, ...]:
    """Item nodes of a select widget, with unique JCR node names."""
    nodes: List[OptionNode] = []
    used = set()
    for option in view.options:
        base = _NODE_CHARS.sub("", option)
        if not base or not (base[0].isalpha() or base[0] == "_"):
            base = f"item{base}"
        node = base
        suffix = 2
        while node in used:
            node = f"{base}{suffix}"
            suffix += 1
        used.add(node)
        nodes.append(OptionNode(node, option, option == view.fallback))
    return tuple(nodes)


def _default_attributes(view: FieldView) -> Tuple[Tuple[str, str], ...]:
    default = view.descriptor.default
    if default is None or view.descriptor.kind == FieldKind.SELECT:
        return ()
    if view.descriptor.kind == FieldKind.CHECKBOX:
        return (("checked", "{Boolean}true"),) if view.descriptor.bind(None) else ()
    return (("value", str(default)),)


@register_renderer
class DialogRenderer(ArtifactRenderer):
    """Renders the Touch UI dialog definition."""

    kind = ArtifactKind.SCHEMA
    template_name = "dialog/content.xml.j2"

    @classmethod
    def filename(cls, names: NamingVariants) -> str:
        return "_cq_dialog/.content.xml"

    def build_widgets(self, ctx: RenderContext) -> List[WidgetView]:
        widgets = []
        for view in ctx.fields:
            widget = widget_for(view.descriptor.kind)
            widgets.append(
                WidgetView(
                    field=view,
                    node=view.name,
                    resource=widget.resource,
                    attributes=widget.attributes + _default_attributes(view),
                    children=widget.children,
                    options=option_nodes(view),
                )
            )
        return widgets

    def render(self, ctx: RenderContext) -> str:
        context = ctx.base_template_context()
        context["widgets"] = self.build_widgets(ctx)
        return self.render_template(self.template_name, context)
