"""
Naming utilities for component code generation.

Derives every casing variant of a human-entered component name and
sanitizes field identifiers for use as Java members and accessors.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Set

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_CASE_HUMP = re.compile(r"([a-z0-9])([A-Z])")

DEFAULT_PROJECT_IDENTIFIER = "myproject"
PROJECT_IDENTIFIER_MAX_LENGTH = 15


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # hero_banner
    CAMEL_CASE = "camel"  # heroBanner
    PASCAL_CASE = "pascal"  # HeroBanner
    KEBAB_CASE = "kebab"  # hero-banner
    SCREAMING_SNAKE = "screaming_snake"  # HERO_BANNER


@dataclass(frozen=True)
class NamingVariants:
    """All casing variants of one display name."""

    original: str
    camel_case: str
    pascal_case: str
    kebab_case: str
    snake_case: str
    constant_case: str

    @property
    def is_empty(self) -> bool:
        """True when the original name had no alphanumeric characters."""
        return not self.kebab_case


def normalize(display_name: str) -> NamingVariants:
    """
    Derive all naming variants from a display name.

    Total function: a name without alphanumeric characters yields empty
    variants and rejecting it is left to validation.

    Args:
        display_name: Human-entered name such as ``"Hero Banner"``

    Returns:
        NamingVariants for the name
    """
    segments = [s for s in _NON_ALNUM.split(display_name) if s]

    if segments:
        camel = segments[0].lower() + "".join(
            s[0].upper() + s[1:].lower() for s in segments[1:]
        )
    else:
        camel = ""
    pascal = camel[:1].upper() + camel[1:]

    kebab = _NON_ALNUM.sub("-", display_name).lower().strip("-")
    snake = _NON_ALNUM.sub("_", display_name).lower().strip("_")

    return NamingVariants(
        original=display_name,
        camel_case=camel,
        pascal_case=pascal,
        kebab_case=kebab,
        snake_case=snake,
        constant_case=snake.upper(),
    )


def suggest_project_identifier(display_name: str) -> str:
    """Suggest a project identifier from a display name."""
    candidate = re.sub(r"[^a-z0-9]", "", display_name.lower())
    candidate = candidate[:PROJECT_IDENTIFIER_MAX_LENGTH]
    # project identifiers may not start with a digit
    candidate = candidate.lstrip("0123456789")
    return candidate or DEFAULT_PROJECT_IDENTIFIER


def bean_property(accessor: str) -> str:
    """HTL property name of an accessor: ``isExternalLink`` -> ``externalLink``."""
    for prefix in ("is", "get"):
        stem = accessor[len(prefix):]
        if accessor.startswith(prefix) and stem[:1].isupper():
            return stem[:1].lower() + stem[1:]
    return accessor


class NameSanitizer:
    """Handles field identifier sanitization and case conversion."""

    def __init__(
        self,
        reserved_words: Set[str] = None,
        builtin_types: Set[str] = None,
        reserved_accessors: Set[str] = None,
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
            reserved_accessors: Methods the generated class already declares
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self.reserved_accessors = reserved_accessors or set()
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.CAMEL_CASE,
        suffix_on_conflict: str = "Value",
    ) -> str:
        """
        Sanitize a field identifier for safe use in generated code.

        Args:
            name: Field identifier, possibly already camelCase
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for reserved word conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        words = self._split_words(name)
        converted = self._join_words(words, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        return final_name

    def accessor_name(
        self, name: str, boolean: bool = False, reserved: Iterable[str] = ()
    ) -> str:
        """
        Build a bean accessor name such as ``getBackgroundImage``.

        The accessor is built from the sanitized member name. An accessor
        whose bean property is already taken by one of the model's own
        methods (or by ``reserved``) gets the conflict suffix.
        """
        member = self.sanitize_name(name)
        prefix = "is" if boolean else "get"
        accessor = prefix + member[:1].upper() + member[1:]

        taken = {bean_property(a) for a in self.reserved_accessors.union(reserved)}
        if bean_property(accessor) in taken:
            accessor = f"{accessor}Value"
        return accessor

    def _split_words(self, name: str) -> list:
        """Split on separators and case humps."""
        humped = _CASE_HUMP.sub(r"\1 \2", name)
        words = [w.lower() for w in _NON_ALNUM.split(humped) if w]
        if not words:
            return ["field"]
        if words[0][0].isdigit():
            words[0] = f"f{words[0]}"
        return words

    def _join_words(self, words: list, target_case: NamingCase) -> str:
        """Join lower-case words in the target case."""
        if target_case == NamingCase.SNAKE_CASE:
            return "_".join(words)
        elif target_case == NamingCase.SCREAMING_SNAKE:
            return "_".join(words).upper()
        elif target_case == NamingCase.KEBAB_CASE:
            return "-".join(words)
        elif target_case == NamingCase.PASCAL_CASE:
            return "".join(w.capitalize() for w in words)
        else:
            return words[0] + "".join(w.capitalize() for w in words[1:])

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words."""
        if name in self.reserved_words or name in self.builtin_types:
            return f"{name}{suffix}"
        return name


def create_java_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Java Sling Models."""
    java_reserved = {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch",
        "char", "class", "const", "continue", "default", "do", "double",
        "else", "enum", "extends", "final", "finally", "float", "for", "goto",
        "if", "implements", "import", "instanceof", "int", "interface", "long",
        "native", "new", "package", "private", "protected", "public", "return",
        "short", "static", "strictfp", "super", "switch", "synchronized",
        "this", "throw", "throws", "transient", "try", "void", "volatile",
        "while", "true", "false", "null", "var", "record", "yield",
    }

    # members and methods the generated model already declares
    model_members = {"resource", "request", "empty"}
    model_accessors = {"isEmpty", "getResource", "getRequest", "getClass"}

    return NameSanitizer(java_reserved, model_members, model_accessors)


_default_sanitizer: Optional[NameSanitizer] = None


def get_java_sanitizer() -> NameSanitizer:
    """Get the shared Java name sanitizer."""
    global _default_sanitizer
    if _default_sanitizer is None:
        _default_sanitizer = create_java_sanitizer()
    return _default_sanitizer


_plain_sanitizer = NameSanitizer()


def to_kebab(name: str) -> str:
    """Convert a field identifier to kebab-case for CSS element names."""
    return _plain_sanitizer.sanitize_name(name, NamingCase.KEBAB_CASE)
