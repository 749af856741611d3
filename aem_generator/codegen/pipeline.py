"""
Configuration and validation pipeline.

Validates a generation request against its component type and, when it is
valid, hands it to the rendering engine. Validation problems are returned as
data; they never escape this module as exceptions.
"""

import re
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..logging_config import get_logger
from .core.config import GeneratorConfig, load_config
from .core.errors import ValidationError
from .core.generator import ComponentGenerator, GenerationResult
from .core.naming import normalize
from .core.schema import ComponentTypeSpec, GenerationRequest, check_value, is_blank
from .registry import ComponentTypeRegistry, get_registry

logger = get_logger(__name__)

DISPLAY_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9\s]*$")
PACKAGE_PATTERN = re.compile(r"^[a-z][a-z0-9]*(\.[a-z][a-z0-9]*)*$")
PROJECT_PATTERN = re.compile(r"^[a-z][a-z0-9]*$")

# Error keys of the request-level inputs
DISPLAY_NAME = "displayName"
PACKAGE_IDENTIFIER = "packageIdentifier"
PROJECT_IDENTIFIER = "projectIdentifier"

MODE_PREVIEW = "preview"
MODE_GENERATE = "generate"


@dataclass(frozen=True)
class FieldError:
    """A validation problem attributed to one input."""

    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a request."""

    errors: Tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def errors_for(self, field: str) -> List[FieldError]:
        """Errors attributed to one input."""
        return [e for e in self.errors if e.field == field]

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "errors": [e.to_dict() for e in self.errors]}


Rule = Callable[[str, Any], None]


def _required(label: str) -> Rule:
    def rule(field: str, value: Any) -> None:
        if is_blank(value):
            raise ValidationError(field, f"{label} is required")

    return rule


def _matches(pattern: "re.Pattern[str]", message: str) -> Rule:
    def rule(field: str, value: Any) -> None:
        if not pattern.match(str(value)):
            raise ValidationError(field, message)

    return rule


def _run_rules(field: str, value: Any, rules: Sequence[Rule]) -> Optional[FieldError]:
    """Apply rules in order and stop at the first failure."""
    for rule in rules:
        try:
            rule(field, value)
        except ValidationError as e:
            return FieldError(e.field, e.message)
    return None


REQUEST_RULES: Tuple[Tuple[str, str, Tuple[Rule, ...]], ...] = (
    (
        DISPLAY_NAME,
        "display_name",
        (
            _required("Component name"),
            _matches(
                DISPLAY_NAME_PATTERN,
                "Component name must start with a letter and contain only letters, "
                "numbers, and spaces",
            ),
        ),
    ),
    (
        PACKAGE_IDENTIFIER,
        "package_identifier",
        (
            _required("Package name"),
            _matches(PACKAGE_PATTERN, "Package name must be a valid Java package"),
        ),
    ),
    (
        PROJECT_IDENTIFIER,
        "project_identifier",
        (
            _required("Project name"),
            _matches(
                PROJECT_PATTERN,
                "Project name must be lowercase and contain only letters and numbers",
            ),
        ),
    ),
)


def _field_rules(spec: ComponentTypeSpec, field_name: str) -> Tuple[Rule, ...]:
    descriptor = spec.get_field(field_name)
    rules: List[Rule] = []

    if descriptor.required:

        def required_binding(field: str, raw: Any) -> None:
            # unchecked is a value, so a required checkbox always passes
            if is_blank(descriptor.bind(raw)):
                raise ValidationError(field, f"{descriptor.label} is required")

        rules.append(required_binding)

    def kind_value(field: str, raw: Any) -> None:
        if is_blank(raw):
            return
        problem = check_value(descriptor.kind, raw, descriptor.options)
        if problem:
            raise ValidationError(field, f"{descriptor.label} {problem}")

    rules.append(kind_value)
    return tuple(rules)


def validate(request: GenerationRequest, spec: ComponentTypeSpec) -> ValidationResult:
    """
    Validate a request against its component type.

    Rules run in order per input and stop at that input's first failure;
    failures of different inputs are all collected.

    Args:
        request: Generation request
        spec: Component type the request refers to

    Returns:
        ValidationResult listing every failing input
    """
    errors: List[FieldError] = []

    for key, attribute, rules in REQUEST_RULES:
        error = _run_rules(key, getattr(request, attribute), rules)
        if error:
            errors.append(error)

    for descriptor in spec.fields:
        raw = request.field_values.get(descriptor.name)
        error = _run_rules(descriptor.name, raw, _field_rules(spec, descriptor.name))
        if error:
            errors.append(error)

    unknown = sorted(set(request.field_values) - set(spec.field_names))
    if unknown:
        logger.warning(
            "Ignoring values for fields not declared by %s: %s", spec.key, ", ".join(unknown)
        )

    if errors:
        logger.debug("Validation failed with %d error(s)", len(errors))

    return ValidationResult(tuple(errors))


def _run(
    request: GenerationRequest,
    mode: str,
    config: Optional[GeneratorConfig],
    registry: Optional[ComponentTypeRegistry],
) -> GenerationResult:
    from .artifacts.logic import evaluate_derived

    spec = (registry or get_registry()).get(request.component_type)
    if request.component_type != spec.key:
        # aliases resolve to the primary type key
        request = request.with_changes(component_type=spec.key)

    metadata: Dict[str, Any] = {"mode": mode, "component_type": spec.key}

    validation = validate(request, spec)
    if not validation.ok:
        logger.info(
            "%s refused for %s: %d validation error(s)",
            mode.capitalize(),
            spec.key,
            len(validation.errors),
        )
        return GenerationResult.invalid(list(validation.errors), metadata)

    names = normalize(request.display_name)
    artifacts = ComponentGenerator(config or load_config()).render(request, spec, names)

    metadata.update(
        {
            "display_name": request.display_name,
            "names": asdict(names),
            "artifact_count": len(artifacts),
            "files": list(artifacts),
            "derived": evaluate_derived(spec, spec.bind_values(request.field_values)),
        }
    )
    return GenerationResult(artifacts=artifacts, metadata=metadata)


def preview(
    request: GenerationRequest,
    config: Optional[GeneratorConfig] = None,
    registry: Optional[ComponentTypeRegistry] = None,
) -> GenerationResult:
    """
    Validate and render a request for preview.

    Raises:
        SchemaError: If the component type is unknown
        RenderError: If rendering detects an internal inconsistency
    """
    return _run(request, MODE_PREVIEW, config, registry)


def generate(
    request: GenerationRequest,
    config: Optional[GeneratorConfig] = None,
    registry: Optional[ComponentTypeRegistry] = None,
) -> GenerationResult:
    """
    Validate and render a request for delivery.

    Identical to :func:`preview` apart from the ``mode`` metadata.
    """
    return _run(request, MODE_GENERATE, config, registry)


def bundle_artifacts(artifacts: Mapping[str, str]) -> str:
    """Concatenate an artifact map into one text with a header per file."""
    parts = []
    for filename, content in artifacts.items():
        parts.append(f"// ========== {filename} ==========\n\n{content}\n\n")
    return "".join(parts)
