"""
Command-line interface for the AEM component generator.

Lists component types, shows their fields, previews and generates
component artifacts, and runs the interactive wizard.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from rich.console import Console
from rich.panel import Panel

from . import __version__
from .codegen import (
    ArtifactKind,
    GenerationRequest,
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    build_form_schema,
    bundle_artifacts,
    generate,
    list_categories,
    list_component_types,
    load_config,
    preview,
    suggest_project_identifier,
)
from .codegen.core.config import get_config_manager
from .display import (
    print_artifacts,
    print_metadata,
    print_schema_table,
    print_type_table,
    print_validation_errors,
    write_artifacts,
)
from .logging_config import get_logger, setup_logging
from .utils import load_request, parse_field_assignments

logger = get_logger(__name__)


class CLIError(GeneratorError):
    """Exception raised for invalid command-line usage."""

    pass


console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="aem-generator",
        description="Generate AEM component code (HTL, Sling Model, dialog, SCSS, README)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  aem-generator types
  aem-generator types --category Content --search image
  aem-generator schema button
  aem-generator preview --type button --name "Call To Action" --field text="Buy Now"
  aem-generator generate --request request.json --output ./components/cta
  aem-generator interactive
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", metavar="FILE", help="Generator configuration file (JSON)")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show metadata and debug logging"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING, DEBUG with --verbose)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    types_parser = subparsers.add_parser("types", help="List available component types")
    types_parser.add_argument(
        "--category", "-c", help="Only types of this category (\"all\" for every type)"
    )
    types_parser.add_argument(
        "--search",
        "-s",
        metavar="TEXT",
        help="Only types whose title or description contains TEXT",
    )
    types_parser.set_defaults(func=_handle_types)

    schema_parser = subparsers.add_parser("schema", help="Show the fields of a component type")
    schema_parser.add_argument("type", help="Component type key or alias")
    schema_parser.set_defaults(func=_handle_schema)

    for name, help_text in (
        ("preview", "Validate and print the generated artifacts"),
        ("generate", "Validate and generate the artifacts"),
    ):
        build_parser = subparsers.add_parser(name, help=help_text)
        _add_request_args(build_parser)
        build_parser.add_argument(
            "--bundle",
            action="store_true",
            help="Print all artifacts as one text with a header per file",
        )
        if name == "generate":
            build_parser.add_argument(
                "--output", "-o", metavar="DIR", help="Write the artifacts into DIR"
            )
        build_parser.set_defaults(func=_handle_build, mode=name)

    interactive_parser = subparsers.add_parser(
        "interactive", help="Walk through type selection and configuration"
    )
    interactive_parser.set_defaults(func=_handle_interactive)

    return parser


def _add_request_args(parser: argparse.ArgumentParser) -> None:
    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument("--request", metavar="FILE", help="Load the request from a JSON file")
    source_group.add_argument("--url", help="Load the request from a URL")

    request_group = parser.add_argument_group("request")
    request_group.add_argument("--type", "-t", dest="component_type", help="Component type key or alias")
    request_group.add_argument("--name", "-n", help="Component display name")
    request_group.add_argument("--package", "-p", help="Java package for the Sling Model")
    request_group.add_argument("--project", help="AEM project identifier")
    request_group.add_argument(
        "--field",
        "-f",
        action="append",
        metavar="NAME=VALUE",
        help="Field value (repeatable)",
    )
    request_group.add_argument(
        "--skip",
        action="append",
        choices=[kind.value for kind in ArtifactKind],
        help="Do not generate an artifact kind (repeatable)",
    )


def build_request(args: argparse.Namespace, config: GeneratorConfig) -> GenerationRequest:
    """
    Build a generation request from a request file/URL and command-line options.

    Options given on the command line override the loaded request.

    Raises:
        CLIError: If no component type is given
        JSONLoaderError: If the request cannot be loaded
    """
    field_values = parse_field_assignments(getattr(args, "field", None))
    skipped = [ArtifactKind.parse(kind) for kind in getattr(args, "skip", None) or []]

    if args.request or args.url:
        source, request = load_request(file_path=args.request, url=args.url)
        console.print(f"Loaded request: {source}")
        changes: dict[str, Any] = {}
        if args.component_type:
            changes["component_type"] = args.component_type
        if args.name is not None:
            changes["display_name"] = args.name
        if args.package:
            changes["package_identifier"] = args.package
        if args.project:
            changes["project_identifier"] = args.project
        if field_values:
            changes["field_values"] = {**request.field_values, **field_values}
        if skipped:
            toggles = dict(request.artifact_toggles)
            toggles.update({kind: False for kind in skipped})
            changes["artifact_toggles"] = toggles
        return request.with_changes(**changes) if changes else request

    if not args.component_type:
        raise CLIError("--type is required unless --request or --url is given")

    display_name = args.name or ""
    if args.project:
        project = args.project
    elif display_name.strip():
        project = suggest_project_identifier(display_name)
    else:
        project = config.default_project

    toggles = config.default_toggles()
    toggles.update({kind: False for kind in skipped})

    return GenerationRequest(
        component_type=args.component_type,
        display_name=display_name,
        package_identifier=args.package or config.default_package,
        project_identifier=project,
        field_values=field_values,
        artifact_toggles=toggles,
    )


def _handle_types(args: argparse.Namespace, config: GeneratorConfig) -> int:
    types = list_component_types(category=args.category, search=args.search)
    if not types:
        console.print("[yellow]No component types found.[/yellow]")
        console.print(
            "[dim]Try another search term or one of the categories: "
            f"{', '.join(list_categories())}[/dim]"
        )
        return 0

    print_type_table(console, types)
    console.print(
        Panel(
            "[bold]Fields:[/bold] aem-generator schema [cyan]TYPE[/cyan]\n"
            "[bold]Preview:[/bold] aem-generator preview --type [cyan]TYPE[/cyan] "
            "--name [dim]\"My Component\"[/dim]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _handle_schema(args: argparse.Namespace, config: GeneratorConfig) -> int:
    print_schema_table(console, build_form_schema(args.type))
    return 0


def _handle_build(args: argparse.Namespace, config: GeneratorConfig) -> int:
    request = build_request(args, config)
    action = generate if args.mode == "generate" else preview
    result = action(request, config)
    return _output_result(result, args)


def _output_result(result: GenerationResult, args: argparse.Namespace) -> int:
    if not result.success:
        print_validation_errors(console, result.errors)
        logger.info("Request refused with %d validation error(s)", len(result.errors))
        return 1

    output_dir = getattr(args, "output", None)
    if output_dir:
        try:
            written = write_artifacts(result.artifacts, output_dir)
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {output_dir}:[/red] {e}")
            logger.error("Failed to write artifacts to %s: %s", output_dir, e)
            return 1
        for path in written:
            console.print(f"[green]✓[/green] {path}")
    elif args.bundle:
        console.print(
            bundle_artifacts(result.artifacts), markup=False, highlight=False, soft_wrap=True
        )
    else:
        print_artifacts(console, result.artifacts)

    if args.verbose:
        print_metadata(console, result.metadata)

    console.print(
        f"\n[green]✓[/green] {result.metadata['artifact_count']} artifact(s) for "
        f"[bold]{result.metadata['display_name']}[/bold] "
        f"({result.metadata['component_type']})"
    )
    return 0


def _handle_interactive(args: argparse.Namespace, config: GeneratorConfig) -> int:
    from .interactive import InteractiveWizard

    return 0 if InteractiveWizard(config, console=console).run() else 1


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``aem-generator`` command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = args.log_level or ("DEBUG" if args.verbose else "WARNING")
    setup_logging(level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        config = load_config(config_file=args.config)
        for warning in get_config_manager().validate_config(config):
            logger.warning("Configuration: %s", warning)
        return args.func(args, config)
    except GeneratorError as e:
        console.print(f"[red]✗ Generation failed:[/red] {e}")
        logger.error("Command '%s' failed: %s", args.command, e)
        return 1
    except OSError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        logger.error("Command '%s' failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
