"""
Component type registry.

Holds the component type specs available to the pipeline and the delivery
surfaces. The global registry is built once from the built-in catalog.
"""

from typing import Any, Dict, List, Optional

from ..logging_config import get_logger
from .core.errors import SchemaError
from .core.schema import ComponentTypeSpec

logger = get_logger(__name__)


class RegistryError(SchemaError):
    """Exception raised for registry-related errors."""

    pass


class ComponentTypeRegistry:
    """Registry for managing available component types."""

    def __init__(self):
        """Initialize empty registry."""
        self._types: Dict[str, ComponentTypeSpec] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        spec: ComponentTypeSpec,
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a component type.

        Args:
            spec: Component type spec
            aliases: Alternative names for this type
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If the component type is invalid or an alias conflicts
        """
        if not isinstance(spec, ComponentTypeSpec):
            raise RegistryError("Component types must be ComponentTypeSpec instances")

        key = spec.key.lower()

        if key in self._types and not replace:
            logger.debug("Component type %s already registered, skipping", key)
            return

        if key in self._aliases and not replace:
            raise RegistryError(f"Type key '{key}' conflicts with an existing alias")

        self._types[key] = spec

        for alias in aliases or []:
            alias_key = alias.lower()

            if alias_key == key:
                continue

            if not replace:
                if alias_key in self._types:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing component type"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = key

        logger.debug("Registered component type %s", key)

    def resolve_key(self, key: str) -> str:
        """Resolve an alias to its primary type key."""
        type_key = str(key).lower()
        return self._aliases.get(type_key, type_key)

    def get(self, key: str) -> ComponentTypeSpec:
        """
        Get a registered component type.

        Args:
            key: Type key or alias

        Returns:
            Component type spec

        Raises:
            RegistryError: If the type is not registered
        """
        type_key = self.resolve_key(key)
        if type_key in self._types:
            return self._types[type_key]

        raise RegistryError(
            f"Unknown component type: {key}. Available: {', '.join(self.list_keys())}"
        )

    def list(self) -> List[ComponentTypeSpec]:
        """Registered specs in registration order."""
        return list(self._types.values())

    def list_keys(self) -> List[str]:
        """Registered type keys in registration order."""
        return list(self._types.keys())

    def get_aliases(self, key: str) -> List[str]:
        """Get all aliases for a component type."""
        type_key = self.resolve_key(key)
        return sorted(alias for alias, target in self._aliases.items() if target == type_key)

    def is_registered(self, key: str) -> bool:
        """Check if a type key or alias is registered."""
        return self.resolve_key(key) in self._types

    def get_type_info(self, key: str) -> Dict[str, Any]:
        """
        Get information about a registered component type.

        Raises:
            RegistryError: If the type is not registered
        """
        spec = self.get(key)
        info = spec.summary()
        info["aliases"] = self.get_aliases(spec.key)
        info["required_fields"] = [f.name for f in spec.required_fields]
        return info


# Global registry instance - created once
_global_registry: Optional[ComponentTypeRegistry] = None


def get_registry() -> ComponentTypeRegistry:
    """Get the global component type registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = ComponentTypeRegistry()
        _auto_register_types(_global_registry)
    return _global_registry


def _auto_register_types(registry: ComponentTypeRegistry):
    """Register the built-in catalog with short aliases."""
    from .catalog import CATALOG_VERSION, builtin_types

    for spec in builtin_types():
        short_name = spec.key.rsplit("-component", 1)[0]
        registry.register(spec, aliases=[short_name])

    logger.debug(
        "Loaded %d built-in component types (catalog %s)",
        len(registry.list()),
        CATALOG_VERSION,
    )


# Public API functions using the global registry


def get_component_type(key: str) -> ComponentTypeSpec:
    """Get a component type spec from the global registry."""
    return get_registry().get(key)


def list_component_types(
    category: Optional[str] = None, search: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Summaries of the registered types for type selection.

    Args:
        category: Only types of this category; None or ``"all"`` keeps every type
        search: Case-insensitive text that must occur in the title or description

    Returns:
        Matching type summaries in registration order
    """
    wanted_category = (category or "all").strip().lower()
    needle = (search or "").strip().lower()

    summaries = []
    for spec in get_registry().list():
        if wanted_category != "all" and spec.category.lower() != wanted_category:
            continue
        if needle and needle not in spec.title.lower() and needle not in spec.description.lower():
            continue
        summaries.append(spec.summary())

    logger.debug(
        "Listed %d component type(s) (category=%s, search=%r)",
        len(summaries),
        wanted_category,
        needle,
    )
    return summaries


def list_categories() -> List[str]:
    """Distinct categories of the registered types, in registration order."""
    categories: List[str] = []
    for spec in get_registry().list():
        if spec.category not in categories:
            categories.append(spec.category)
    return categories


def build_form_schema(key: str) -> Dict[str, Any]:
    """
    Describe the configuration form of a component type.

    The form is an envelope around the ordered field descriptors: the type
    summary, its aliases and required field names, and ``fields``.

    Args:
        key: Type key or alias

    Returns:
        Type information with the ordered field descriptors under ``fields``

    Raises:
        RegistryError: If the type is not registered
    """
    registry = get_registry()
    schema = registry.get_type_info(key)
    schema["fields"] = [f.to_dict() for f in registry.get(key).fields]
    return schema
