"""
Interactive component generation wizard.

Walks through type selection, configuration and generation with rich
prompts, threading an immutable GenerationSession through each step.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from .codegen import (
    GeneratorConfig,
    GeneratorError,
    build_form_schema,
    generate,
    list_component_types,
    preview,
)
from .display import (
    print_artifacts,
    print_metadata,
    print_schema_table,
    print_type_table,
    print_validation_errors,
    write_artifacts,
)
from .logging_config import get_logger
from .session import FormChangeDebouncer, GenerationSession, SessionStep

logger = get_logger(__name__)


class InteractiveWizard:
    """Dedicated handler for interactive component generation."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        console: Console = None,
        debouncer: Optional[FormChangeDebouncer] = None,
    ):
        """
        Initialize the wizard.

        Args:
            config: Generator configuration (defaults when None)
            console: Rich console instance (creates new if None)
            debouncer: Coalesces field answers into session updates
                (built from the configuration if None)
        """
        self.config = config or GeneratorConfig()
        self.console = console or Console()
        self.debouncer = debouncer or FormChangeDebouncer.from_config(self.config)
        self.session = GenerationSession.start(self.config)

    def run(self) -> bool:
        """
        Run the wizard until the user quits.

        Returns:
            True if the user quit normally, False if cancelled
        """
        try:
            while True:
                if self.session.step == SessionStep.SELECTION:
                    session = self._select_type()
                elif self.session.step == SessionStep.CONFIGURATION:
                    session = self._configure()
                else:
                    session = self._after_generation()

                if session is None:
                    self.console.print("[dim]👋 Bye[/dim]")
                    return True
                self.session = session

        except KeyboardInterrupt:
            self.console.print("\n[yellow]👋 Component generation cancelled[/yellow]")
            return False

    def _select_type(self) -> Optional[GenerationSession]:
        """Step 1: choose a component type."""
        types = list_component_types()
        print_type_table(self.console, types)

        choice = Prompt.ask(
            "\n[bold]Select component type[/bold] ([cyan]q[/cyan] to quit)",
            choices=[str(i) for i in range(1, len(types) + 1)] + ["q"],
            default="1",
        )
        if choice == "q":
            return None
        return self.session.select_type(types[int(choice) - 1]["key"])

    def _configure(self) -> Optional[GenerationSession]:
        """Step 2: fill in the form, then preview or generate."""
        schema = build_form_schema(self.session.component_type)
        print_schema_table(self.console, schema)

        session = self._ask_identity(self.session)
        session = self._ask_fields(schema, session)

        self.console.print(
            Panel.fit(
                "[cyan]p.[/cyan] 👀 Preview\n"
                "[cyan]g.[/cyan] 🚀 Generate files\n"
                "[cyan]e.[/cyan] ✏️  Edit again\n"
                "[cyan]b.[/cyan] 🔙 Back to type selection\n"
                "[cyan]q.[/cyan] Quit",
                border_style="blue",
                title="⚡ Next",
            )
        )
        action = Prompt.ask(
            "[bold]Choose an option[/bold]", choices=["p", "g", "e", "b", "q"], default="p"
        )

        if action == "q":
            return None
        if action == "b":
            return session.back()
        if action == "e":
            return session
        return self._run_action(session, generate_files=action == "g")

    def _ask_identity(self, session: GenerationSession) -> GenerationSession:
        display_name = Prompt.ask(
            "[bold]Component name[/bold]", default=session.display_name or None
        )
        session = session.update_identity(display_name=display_name or "")

        package = Prompt.ask("Java package", default=session.package_identifier)
        project = Prompt.ask("Project name", default=session.project_identifier)

        changes: Dict[str, Any] = {"package_identifier": package}
        if project != session.project_identifier:
            changes["project_identifier"] = project
        return session.update_identity(**changes)

    def _ask_fields(
        self, schema: Dict[str, Any], session: GenerationSession
    ) -> GenerationSession:
        """
        Prompt once per field, in declaration order.

        Answers go through the debouncer: answers given in quick succession
        reach the session as one update, and whatever is still pending
        after the last field is applied at the end.
        """
        current = session.form_values
        values: Dict[str, Any] = {}
        for descriptor in schema["fields"]:
            name = descriptor["name"]
            label = descriptor["label"]
            if descriptor["required"]:
                label = f"{label} [red]*[/red]"
            previous = current.get(name, descriptor.get("default"))

            if descriptor["kind"] == "checkbox":
                values[name] = Confirm.ask(label, default=bool(previous))
            elif descriptor["kind"] == "select":
                options = descriptor["options"]
                values[name] = Prompt.ask(
                    label,
                    choices=options,
                    default=previous if previous in options else options[0],
                )
            else:
                values[name] = Prompt.ask(label, default=previous or "")

            session = self._apply_settled(session, self.debouncer.poll())
            self.debouncer.push(values)

        return self._apply_settled(session, self.debouncer.flush())

    def _apply_settled(
        self, session: GenerationSession, settled: Optional[Dict[str, Any]]
    ) -> GenerationSession:
        if settled is None:
            return session
        logger.debug("Applying %d settled field value(s)", len(settled))
        return session.update_values(settled)

    def _run_action(
        self, session: GenerationSession, generate_files: bool
    ) -> GenerationSession:
        request = session.to_request()
        try:
            if generate_files:
                result = generate(request, self.config)
            else:
                result = preview(request, self.config)
        except GeneratorError as e:
            self.console.print(f"[red]❌ Generation failed:[/red] {e}")
            logger.error("Interactive generation failed: %s", e)
            return session

        session = session.with_result(result)
        if not result.success:
            print_validation_errors(self.console, result.errors)
            return session

        if generate_files:
            self._save(result.artifacts, result.metadata["names"]["kebab_case"])
        else:
            print_artifacts(self.console, result.artifacts)
        print_metadata(self.console, result.metadata)
        return session

    def _save(self, artifacts: Dict[str, str], dir_name: str) -> None:
        default_dir = Path.cwd() / dir_name
        output_dir = Prompt.ask("Output directory", default=str(default_dir))

        if Path(output_dir).exists() and not Confirm.ask(
            f"[yellow]{output_dir} exists. Overwrite files?[/yellow]", default=False
        ):
            self.console.print("[dim]Nothing written[/dim]")
            return

        try:
            written = write_artifacts(artifacts, output_dir)
        except OSError as e:
            self.console.print(f"[red]❌ Failed to write to {output_dir}:[/red] {e}")
            logger.error("Failed to write artifacts to %s: %s", output_dir, e)
            return

        for path in written:
            self.console.print(f"[green]✓[/green] {path}")

    def _after_generation(self) -> Optional[GenerationSession]:
        """Step 3: decide what to do with the generated component."""
        action = Prompt.ask(
            "\n[bold]Next[/bold] ([cyan]e[/cyan] edit, [cyan]n[/cyan] new component, "
            "[cyan]q[/cyan] quit)",
            choices=["e", "n", "q"],
            default="n",
        )
        if action == "q":
            return None
        if action == "e":
            return self.session.back()
        return self.session.reset(self.config)
