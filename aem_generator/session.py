"""Wizard state for delivery surfaces.

A :class:`GenerationSession` is an immutable value: every transition returns
a new session, so the CLI wizard (or any other surface) threads it through
its own control flow instead of keeping process-wide state.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from .codegen.core.config import GeneratorConfig
from .codegen.core.errors import GeneratorError
from .codegen.core.generator import GenerationResult
from .codegen.core.naming import suggest_project_identifier
from .codegen.core.schema import ArtifactKind, GenerationRequest
from .logging_config import get_logger

logger = get_logger(__name__)


class SessionError(GeneratorError):
    """Transition attempted from a step that does not allow it."""

    pass


class SessionStep(Enum):
    """Wizard steps in the order a user walks through them."""

    SELECTION = "selection"
    CONFIGURATION = "configuration"
    GENERATION = "generation"


@dataclass(frozen=True)
class GenerationSession:
    """Immutable wizard state."""

    step: SessionStep = SessionStep.SELECTION
    component_type: str | None = None
    display_name: str = ""
    package_identifier: str = ""
    project_identifier: str = ""
    project_set_manually: bool = False
    form_values: Mapping[str, Any] = field(default_factory=dict)
    artifact_toggles: Mapping[ArtifactKind, bool] = field(default_factory=dict)
    result: GenerationResult | None = None

    def __post_init__(self):
        object.__setattr__(self, "form_values", MappingProxyType(dict(self.form_values)))
        object.__setattr__(
            self, "artifact_toggles", MappingProxyType(dict(self.artifact_toggles))
        )

    @classmethod
    def start(cls, config: GeneratorConfig | None = None) -> GenerationSession:
        """New session at type selection, seeded with configured defaults."""
        config = config or GeneratorConfig()
        return cls(
            package_identifier=config.default_package,
            project_identifier=config.default_project,
            artifact_toggles=config.default_toggles(),
        )

    def _require(self, *steps: SessionStep) -> None:
        if self.step not in steps:
            allowed = ", ".join(s.value for s in steps)
            raise SessionError(
                f"Cannot do this at step '{self.step.value}' (allowed: {allowed})"
            )

    def select_type(self, component_type: str) -> GenerationSession:
        """Choose a component type and move to configuration.

        Field values of a previously selected type are dropped.
        """
        self._require(SessionStep.SELECTION)
        logger.debug("Session selected component type %s", component_type)
        return replace(
            self,
            step=SessionStep.CONFIGURATION,
            component_type=component_type,
            form_values={},
            result=None,
        )

    def update_identity(
        self,
        display_name: str | None = None,
        package_identifier: str | None = None,
        project_identifier: str | None = None,
    ) -> GenerationSession:
        """Change the naming inputs.

        Until a project identifier is entered explicitly it follows the
        display name through :func:`suggest_project_identifier`.
        """
        self._require(SessionStep.CONFIGURATION)
        changes: dict[str, Any] = {"result": None}

        if package_identifier is not None:
            changes["package_identifier"] = package_identifier

        if project_identifier is not None:
            changes["project_identifier"] = project_identifier
            changes["project_set_manually"] = True

        if display_name is not None:
            changes["display_name"] = display_name
            manual = changes.get("project_set_manually", self.project_set_manually)
            if not manual and display_name.strip():
                changes["project_identifier"] = suggest_project_identifier(display_name)

        return replace(self, **changes)

    def update_values(self, values: Mapping[str, Any]) -> GenerationSession:
        """Merge field values into the form."""
        self._require(SessionStep.CONFIGURATION)
        merged = dict(self.form_values)
        merged.update(values)
        return replace(self, form_values=merged, result=None)

    def toggle_artifact(self, kind: ArtifactKind | str, enabled: bool) -> GenerationSession:
        self._require(SessionStep.CONFIGURATION)
        toggles = dict(self.artifact_toggles)
        toggles[ArtifactKind.parse(kind)] = enabled
        return replace(self, artifact_toggles=toggles, result=None)

    def to_request(self) -> GenerationRequest:
        """Build the request for the current form.

        Raises:
            SessionError: If no component type has been selected
        """
        if not self.component_type:
            raise SessionError("No component type selected")
        return GenerationRequest(
            component_type=self.component_type,
            display_name=self.display_name,
            package_identifier=self.package_identifier,
            project_identifier=self.project_identifier,
            field_values=self.form_values,
            artifact_toggles=self.artifact_toggles,
        )

    def with_result(self, result: GenerationResult) -> GenerationSession:
        """Record a preview or generate outcome.

        A successful result moves to the generation step; a refused one
        keeps the user on configuration so the form can be corrected.
        """
        self._require(SessionStep.CONFIGURATION, SessionStep.GENERATION)
        step = SessionStep.GENERATION if result.success else SessionStep.CONFIGURATION
        return replace(self, step=step, result=result)

    def back(self) -> GenerationSession:
        """Go one step back: generation to configuration, configuration to selection."""
        if self.step == SessionStep.GENERATION:
            return replace(self, step=SessionStep.CONFIGURATION, result=None)
        if self.step == SessionStep.CONFIGURATION:
            return replace(
                self,
                step=SessionStep.SELECTION,
                component_type=None,
                form_values={},
                result=None,
            )
        return self

    def reset(self, config: GeneratorConfig | None = None) -> GenerationSession:
        """Start over at type selection."""
        return GenerationSession.start(config)


class FormChangeDebouncer:
    """Coalesce rapid form changes into one update.

    Every :meth:`push` restarts the wait; :meth:`poll` hands out the most
    recent values once the wait has elapsed, exactly once.

    Args:
        wait_ms: Quiet period in milliseconds.
        clock: Monotonic clock returning seconds.
    """

    def __init__(self, wait_ms: int = 300, clock: Callable[[], float] = time.monotonic):
        if wait_ms < 0:
            raise ValueError(f"wait_ms must not be negative: {wait_ms}")
        self.wait = wait_ms / 1000.0
        self._clock = clock
        self._pending: dict[str, Any] | None = None
        self._deadline = 0.0

    @classmethod
    def from_config(cls, config: GeneratorConfig, **kwargs: Any) -> FormChangeDebouncer:
        return cls(config.debounce_ms, **kwargs)

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def push(self, values: Mapping[str, Any]) -> None:
        """Record the latest form values and restart the wait."""
        self._pending = dict(values)
        self._deadline = self._clock() + self.wait

    def poll(self) -> dict[str, Any] | None:
        """Return the settled values, or None while changes are still arriving."""
        if self._pending is None or self._clock() < self._deadline:
            return None
        values, self._pending = self._pending, None
        return values

    def flush(self) -> dict[str, Any] | None:
        """Return pending values immediately, ignoring the wait."""
        values, self._pending = self._pending, None
        return values
