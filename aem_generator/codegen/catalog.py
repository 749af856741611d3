"""
Built-in component type catalog.

The catalog is versioned; the global registry is built from it once and is
not mutated afterwards.
"""

from typing import List

from .core.schema import ComponentTypeSpec, FieldDescriptor, FieldKind

CATALOG_VERSION = "1.0.0"


TEXT_COMPONENT = ComponentTypeSpec(
    key="text-component",
    title="Text Component",
    description="A flexible text component with rich text editing capabilities",
    category="Content",
    icon="📝",
    fields=(
        FieldDescriptor("title", FieldKind.TEXT, "Title"),
        FieldDescriptor("text", FieldKind.RICHTEXT, "Rich Text Content", required=True),
        FieldDescriptor(
            "alignment",
            FieldKind.SELECT,
            "Text Alignment",
            options=("left", "center", "right"),
            default="left",
        ),
    ),
    empty_when=("text",),
    elements=("title-wrapper", "title", "text"),
)

IMAGE_COMPONENT = ComponentTypeSpec(
    key="image-component",
    title="Image Component",
    description="Responsive image component with multiple format support",
    category="Media",
    icon="🖼️",
    fields=(
        FieldDescriptor("image", FieldKind.IMAGE, "Image", required=True),
        FieldDescriptor(
            "alt",
            FieldKind.TEXT,
            "Alt Text",
            required=True,
            description="Alternative text for screen readers",
        ),
        FieldDescriptor("caption", FieldKind.TEXT, "Caption"),
        FieldDescriptor("linkUrl", FieldKind.PATHFIELD, "Link URL"),
    ),
    empty_when=("image",),
    elements=("image-wrapper", "image", "caption", "link"),
)

BUTTON_COMPONENT = ComponentTypeSpec(
    key="button-component",
    title="Button Component",
    description="Customizable button with various styles and actions",
    category="Interactive",
    icon="🔘",
    fields=(
        FieldDescriptor("text", FieldKind.TEXT, "Button Text", required=True),
        FieldDescriptor("url", FieldKind.PATHFIELD, "URL"),
        FieldDescriptor(
            "style",
            FieldKind.SELECT,
            "Button Style",
            options=("primary", "secondary", "outline"),
            default="primary",
        ),
        FieldDescriptor(
            "size",
            FieldKind.SELECT,
            "Size",
            options=("small", "medium", "large"),
            default="medium",
        ),
    ),
    empty_when=("text",),
    elements=("wrapper", "button"),
)

CONTAINER_COMPONENT = ComponentTypeSpec(
    key="container-component",
    title="Container Component",
    description="Layout container for organizing other components",
    category="Layout",
    icon="📦",
    fields=(
        FieldDescriptor(
            "containerType",
            FieldKind.SELECT,
            "Container Type",
            options=("default", "fluid", "fixed"),
            default="default",
        ),
        FieldDescriptor("backgroundColor", FieldKind.COLORFIELD, "Background Color"),
        FieldDescriptor(
            "padding",
            FieldKind.SELECT,
            "Padding",
            options=("none", "small", "medium", "large"),
            default="medium",
        ),
    ),
    # containers render their children even without own content
    empty_when=(),
    elements=("inner",),
)

HERO_COMPONENT = ComponentTypeSpec(
    key="hero-component",
    title="Hero Component",
    description="Eye-catching hero section with image and text overlay",
    category="Content",
    icon="🦸",
    fields=(
        FieldDescriptor("backgroundImage", FieldKind.IMAGE, "Background Image", required=True),
        FieldDescriptor("title", FieldKind.TEXT, "Hero Title", required=True),
        FieldDescriptor("subtitle", FieldKind.TEXT, "Subtitle"),
        FieldDescriptor("ctaText", FieldKind.TEXT, "CTA Button Text"),
        FieldDescriptor("ctaUrl", FieldKind.PATHFIELD, "CTA URL"),
    ),
    empty_when=("backgroundImage", "title"),
    elements=(
        "background",
        "overlay",
        "content-wrapper",
        "title",
        "subtitle",
        "cta",
        "cta-button",
    ),
)

CARD_COMPONENT = ComponentTypeSpec(
    key="card-component",
    title="Card Component",
    description="Versatile card component for displaying content blocks",
    category="Content",
    icon="🃏",
    fields=(
        FieldDescriptor("image", FieldKind.IMAGE, "Card Image"),
        FieldDescriptor("title", FieldKind.TEXT, "Card Title", required=True),
        FieldDescriptor("description", FieldKind.TEXTAREA, "Description"),
        FieldDescriptor("link", FieldKind.PATHFIELD, "Card Link"),
    ),
    empty_when=("title",),
    elements=(
        "image-wrapper",
        "image",
        "body",
        "title",
        "description",
        "link-wrapper",
        "link",
    ),
)


BUILTIN_TYPES = (
    TEXT_COMPONENT,
    IMAGE_COMPONENT,
    BUTTON_COMPONENT,
    CONTAINER_COMPONENT,
    HERO_COMPONENT,
    CARD_COMPONENT,
)


def builtin_types() -> List[ComponentTypeSpec]:
    """Built-in component types in catalog order."""
    return list(BUILTIN_TYPES)
