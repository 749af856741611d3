"""
Core schema representation for component generation.

Defines field kinds, field descriptors, component type specs and the
immutable generation request that every renderer consumes.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .errors import SchemaError

FieldValue = Union[str, bool]

_FIELD_NAME = re.compile(r"^[a-z][A-Za-z0-9]*$")
_TYPE_KEY = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")
_HEX_COLOR = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")

_TRUE_STRINGS = {"true", "on", "yes", "1"}
_FALSE_STRINGS = {"false", "off", "no", "0", ""}


class FieldKind(Enum):
    """Authorable property kinds supported by every artifact renderer."""

    TEXT = "text"
    TEXTAREA = "textarea"
    RICHTEXT = "richtext"
    SELECT = "select"
    CHECKBOX = "checkbox"
    IMAGE = "image"
    PATHFIELD = "pathfield"
    COLORFIELD = "colorfield"

    @classmethod
    def parse(cls, value: Union[str, "FieldKind"]) -> "FieldKind":
        """Parse a kind name, raising SchemaError for unknown kinds."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise SchemaError(f"Unknown field kind: {value}")


class ArtifactKind(Enum):
    """Artifact kinds in their fixed assembly order."""

    MARKUP = "markup"
    LOGIC = "logic"
    SCHEMA = "schema"
    STYLE = "style"
    DOCS = "docs"

    @classmethod
    def ordered(cls) -> List["ArtifactKind"]:
        """Return all kinds in assembly order."""
        return list(cls)

    @classmethod
    def parse(cls, value: Union[str, "ArtifactKind"]) -> "ArtifactKind":
        """Parse an artifact kind name, raising SchemaError for unknown kinds."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise SchemaError(f"Unknown artifact kind: {value}")


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings. Booleans are never blank."""
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    return not str(value).strip()


def coerce_checkbox(value: Any) -> bool:
    """Coerce a raw checkbox value to a boolean."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_STRINGS


def check_value(kind: FieldKind, value: Any, options: Tuple[str, ...] = ()) -> Optional[str]:
    """
    Check a non-blank value against the rules of its field kind.

    Args:
        kind: Field kind
        value: Submitted or default value
        options: Allowed options for select fields

    Returns:
        Error message, or None when the value is acceptable
    """
    if kind == FieldKind.CHECKBOX:
        if isinstance(value, bool):
            return None
        if str(value).strip().lower() in _TRUE_STRINGS | _FALSE_STRINGS:
            return None
        return "must be a boolean value"

    if not isinstance(value, str):
        return "must be a string"

    if kind == FieldKind.SELECT:
        if value not in options:
            return f"must be one of: {', '.join(options)}"
    elif kind == FieldKind.COLORFIELD:
        if not _HEX_COLOR.match(value.strip()):
            return "must be a hex color such as #3B82F6"

    return None


@dataclass(frozen=True)
class FieldDescriptor:
    """Represents a single authorable field of a component type."""

    name: str
    kind: FieldKind
    label: str
    required: bool = False
    options: Tuple[str, ...] = ()
    default: Optional[FieldValue] = None
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", FieldKind.parse(self.kind))
        object.__setattr__(self, "options", tuple(self.options or ()))

        if not _FIELD_NAME.match(self.name):
            raise SchemaError(f"Invalid field name: {self.name!r}")

        if self.kind == FieldKind.SELECT:
            if not self.options:
                raise SchemaError(f"Select field '{self.name}' needs options")
            if len(set(self.options)) != len(self.options):
                raise SchemaError(f"Select field '{self.name}' has duplicate options")
        elif self.options:
            raise SchemaError(
                f"Field '{self.name}' of kind {self.kind.value} cannot declare options"
            )

        if self.default is not None:
            problem = check_value(self.kind, self.default, self.options)
            if problem:
                raise SchemaError(f"Default of field '{self.name}' {problem}")

    @property
    def fallback(self) -> Optional[FieldValue]:
        """Value used when nothing was submitted; selects fall back to their first option."""
        if self.default is not None:
            return self.default
        if self.kind == FieldKind.SELECT:
            return self.options[0]
        return None

    def bind(self, raw: Any) -> FieldValue:
        """Resolve the bound value: submitted value, else default, else empty."""
        value = raw if not is_blank(raw) else self.default
        if self.kind == FieldKind.CHECKBOX:
            return coerce_checkbox(value)
        if value is None:
            return ""
        return str(value)

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation for form builders."""
        data: Dict[str, Any] = {
            "name": self.name,
            "kind": self.kind.value,
            "label": self.label,
            "required": self.required,
        }
        if self.options:
            data["options"] = list(self.options)
        if self.default is not None:
            data["default"] = self.default
        if self.description:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class ComponentTypeSpec:
    """Represents a registered component type and its field schema."""

    key: str
    title: str
    description: str
    category: str
    icon: str
    fields: Tuple[FieldDescriptor, ...] = ()
    empty_when: Tuple[str, ...] = ()
    elements: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "empty_when", tuple(self.empty_when))
        object.__setattr__(self, "elements", tuple(self.elements))

        if not _TYPE_KEY.match(self.key):
            raise SchemaError(f"Invalid component type key: {self.key!r}")

        names = [f.name for f in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise SchemaError(
                f"Component type '{self.key}' declares duplicate fields: {', '.join(duplicates)}"
            )

        unknown = [n for n in self.empty_when if n not in names]
        if unknown:
            raise SchemaError(
                f"Emptiness predicate of '{self.key}' references unknown fields: "
                f"{', '.join(unknown)}"
            )

    @property
    def field_names(self) -> List[str]:
        """Field names in declaration order."""
        return [f.name for f in self.fields]

    @property
    def required_fields(self) -> List[FieldDescriptor]:
        """Required fields in declaration order."""
        return [f for f in self.fields if f.required]

    def get_field(self, name: str) -> Optional[FieldDescriptor]:
        """Get field by name."""
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        return None

    def bind_values(self, raw_values: Mapping[str, Any]) -> Dict[str, FieldValue]:
        """Bind raw submitted values to every declared field, in order."""
        return {f.name: f.bind(raw_values.get(f.name)) for f in self.fields}

    def is_empty(self, bound_values: Mapping[str, FieldValue]) -> bool:
        """Evaluate the declared emptiness predicate against bound values."""
        if not self.empty_when:
            return False
        return all(is_blank(bound_values.get(name)) for name in self.empty_when)

    def summary(self) -> Dict[str, Any]:
        """Summary used by type selection surfaces."""
        return {
            "key": self.key,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "icon": self.icon,
            "field_count": len(self.fields),
        }


@dataclass(frozen=True)
class GenerationRequest:
    """Immutable input for one preview or generate action."""

    component_type: str
    display_name: str
    package_identifier: str
    project_identifier: str
    field_values: Mapping[str, FieldValue] = field(default_factory=dict)
    artifact_toggles: Mapping[ArtifactKind, bool] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "field_values", MappingProxyType(dict(self.field_values or {}))
        )
        toggles = {
            ArtifactKind.parse(kind): bool(enabled)
            for kind, enabled in (self.artifact_toggles or {}).items()
        }
        object.__setattr__(self, "artifact_toggles", MappingProxyType(toggles))

    def is_enabled(self, kind: ArtifactKind) -> bool:
        """Artifacts are enabled unless explicitly toggled off."""
        return self.artifact_toggles.get(kind, True)

    @property
    def enabled_artifacts(self) -> List[ArtifactKind]:
        """Enabled artifact kinds in assembly order."""
        return [kind for kind in ArtifactKind.ordered() if self.is_enabled(kind)]

    def with_changes(self, **changes: Any) -> "GenerationRequest":
        """Return a new request with some attributes replaced."""
        if "field_values" in changes:
            changes["field_values"] = dict(changes["field_values"])
        if "artifact_toggles" in changes:
            changes["artifact_toggles"] = dict(changes["artifact_toggles"])
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible representation."""
        return {
            "componentType": self.component_type,
            "displayName": self.display_name,
            "packageIdentifier": self.package_identifier,
            "projectIdentifier": self.project_identifier,
            "fieldValues": dict(self.field_values),
            "artifactToggles": {k.value: v for k, v in self.artifact_toggles.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationRequest":
        """
        Build a request from a JSON object.

        Accepts both camelCase and snake_case keys.

        Raises:
            SchemaError: If the object is missing the component type
        """

        def pick(camel: str, snake: str, default: Any = "") -> Any:
            if camel in data:
                return data[camel]
            return data.get(snake, default)

        component_type = pick("componentType", "component_type", None)
        if not component_type:
            raise SchemaError("Request is missing 'componentType'")

        return cls(
            component_type=str(component_type),
            display_name=str(pick("displayName", "display_name")),
            package_identifier=str(pick("packageIdentifier", "package_identifier")),
            project_identifier=str(pick("projectIdentifier", "project_identifier")),
            field_values=dict(pick("fieldValues", "field_values", {}) or {}),
            artifact_toggles=dict(pick("artifactToggles", "artifact_toggles", {}) or {}),
        )
