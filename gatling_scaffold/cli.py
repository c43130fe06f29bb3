"""Command-line front-end.

Usage::

    gatling-scaffold new                          # interactive
    gatling-scaffold new --non-interactive --name my-perf-tests --language typescript
    gatling-scaffold validate ./my-perf-tests
    gatling-scaffold combos

The core pipeline never prompts.  This module turns prompts or flags into a
``ProjectSpec`` and hands it over.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from .config import Config
from .errors import InputValidationError, ScaffoldError, TemplateRenderError
from .scaffolder import ProjectGenerator, ProjectSpec, supported_combos
from .scaffolder import matrix
from .utils import (
    configure_logging,
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
)
from .validator import ValidationEngine, print_report

Ask = Callable[..., str]

# ProjectSpec field -> (argparse dest, prompt label)
_PROMPTED_FIELDS: dict[str, tuple[str, str]] = {
    "name": ("name", "Project name (e.g. my-perf-tests)"),
    "namespace": ("namespace", "Base package (e.g. com.example.perf)"),
    "simulation_class": ("simulation", "Simulation class name (e.g. ApiSimulation)"),
    "base_url": ("base_url", "Target base URL (e.g. https://api.example.com)"),
}


# ---------------------------------------------------------------------------
# ProjectSpec construction
# ---------------------------------------------------------------------------


def build_project_spec(values: dict[str, Any]) -> ProjectSpec:
    """Build a ``ProjectSpec``, reporting bad values as ``InputValidationError``."""
    try:
        return ProjectSpec(**values)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "value"
        raise InputValidationError(field, error.get("input"), error["msg"]) from exc


def spec_values_from_args(args: argparse.Namespace, config: Config) -> dict[str, Any]:
    """Non-interactive mode: flags first, then the configured defaults."""
    language = args.language or config.language
    return {
        "name": args.name or config.name,
        "language": language,
        "build_tool": args.build_tool or config.build_tool or matrix.default_build_tool(language),
        "namespace": args.namespace or config.namespace,
        "simulation_class": args.simulation or config.simulation,
        "base_url": args.base_url or config.base_url,
        "users": args.users if args.users is not None else config.users,
    }


def prompt_spec_values(
    args: argparse.Namespace, config: Config, ask: Ask = Prompt.ask
) -> dict[str, Any]:
    """Interactive mode: prompt for every value not already given as a flag.

    An empty answer takes the documented default.  The build tool is only
    asked for languages that offer more than one.
    """
    values = spec_values_from_args(args, config)

    if args.name is None:
        values["name"] = ask(_PROMPTED_FIELDS["name"][1], default=config.name)

    if args.language is None:
        values["language"] = ask(
            "Language", choices=list(matrix.LANGUAGES), default=config.language
        )
    tools = matrix.profile(values["language"]).build_tools

    if args.build_tool is None:
        default_tool = config.build_tool if config.build_tool in tools else tools[0]
        if len(tools) > 1:
            values["build_tool"] = ask("Build tool", choices=list(tools), default=default_tool)
        else:
            values["build_tool"] = default_tool

    for field in ("namespace", "simulation_class", "base_url"):
        dest, label = _PROMPTED_FIELDS[field]
        if getattr(args, dest) is None:
            values[field] = ask(label, default=getattr(config, dest))

    return values


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_new(args: argparse.Namespace, config: Config, ask: Ask = Prompt.ask) -> int:
    if args.non_interactive:
        values = spec_values_from_args(args, config)
    else:
        print_header("Gatling Project Scaffold")
        values = prompt_spec_values(args, config, ask)

    spec = build_project_spec(values)
    generator = ProjectGenerator(spec)
    output_dir = Path(args.output_dir) if args.output_dir else config.output_dir
    target = output_dir / spec.name

    if args.dry_run:
        console.print(f"Would create {escape(str(target))}:")
        for rendered in generator.preview():
            console.print(f"  {rendered.path}", soft_wrap=True)
        return 0

    project = generator.generate(target)
    print_summary_table(
        {
            "Project": spec.name,
            "Language": spec.language,
            "Build tool": spec.build_tool,
            "Location": str(project.root),
            "Files": str(len(project.files)),
        },
        title="Project created",
    )
    print_success(f"Project created at {project.root}")
    _print_next_steps(spec, project.root)
    return 0


def cmd_validate(args: argparse.Namespace, config: Config) -> int:
    engine = ValidationEngine(max_workers=args.workers)
    report = engine.validate(args.project_dir)
    if args.json:
        console.print_json(report.model_dump_json())
    else:
        print_report(report)
    return report.exit_code


def cmd_combos(args: argparse.Namespace, config: Config) -> int:
    table = Table(title="Supported combinations", header_style="bold cyan")
    table.add_column("Language")
    table.add_column("Build tool")
    table.add_column("Template set", style="dim")
    for combo in supported_combos():
        table.add_row(
            combo.language,
            combo.build_tool,
            matrix.resolve(combo.language, combo.build_tool),
        )
    console.print(table)
    return 0


def _print_next_steps(spec: ProjectSpec, root: Path) -> None:
    console.print("\n  [bold]Next steps:[/bold]")
    console.print(f"  1. cd {escape(str(root))}", soft_wrap=True, highlight=False)
    if spec.build_tool == "maven":
        console.print(
            f"  2. mvn gatling:test -Dgatling.simulationClass={spec.namespace}.{spec.simulation_class}",
            soft_wrap=True,
        )
    elif spec.build_tool == "gradle":
        console.print(
            f"  2. gradle gatlingRun --simulation {spec.namespace}.{spec.simulation_class}",
            soft_wrap=True,
        )
    else:
        console.print("  2. npm install")
        console.print("  3. npm test")
    console.print()


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gatling-scaffold",
        description="Scaffold and validate Gatling load-test projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  gatling-scaffold new\n"
            "  gatling-scaffold new --non-interactive --name my-perf-tests --language kotlin --build-tool gradle\n"
            "  gatling-scaffold validate ./my-perf-tests\n"
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser("new", help="Scaffold a new Gatling project")
    new.add_argument("--name", default=None, help="Project name (default: my-perf-tests)")
    new.add_argument("--language", default=None, help="java, kotlin, scala, typescript or javascript")
    new.add_argument("--build-tool", default=None, help="maven or gradle (JVM); npm (JS/TS)")
    new.add_argument("--namespace", default=None, help="Base package (default: perf)")
    new.add_argument("--simulation", default=None, help="Simulation name (default: ApiSimulation)")
    new.add_argument("--base-url", default=None, help="Target base URL")
    new.add_argument("--users", type=int, default=None, help="Default user count (default: 10)")
    new.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Directory in which the project folder is created (default: .)",
    )
    new.add_argument(
        "--non-interactive", "-y",
        action="store_true",
        help="Do not prompt; use flags and defaults",
    )
    new.add_argument("--dry-run", action="store_true", help="List files without writing them")

    validate = subparsers.add_parser("validate", help="Validate a Gatling project")
    validate.add_argument("project_dir", nargs="?", default=".", help="Project directory (default: .)")
    validate.add_argument("--json", action="store_true", help="Print the report as JSON")
    validate.add_argument(
        "--workers", type=int, default=None, help="Evaluate rules on N threads"
    )

    subparsers.add_parser("combos", help="List supported language/build tool combinations")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``gatling-scaffold`` and ``python -m gatling_scaffold``."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        config = Config.from_env()
    except (ValidationError, ValueError) as exc:
        print_error(f"Invalid GATLING_SCAFFOLD_* environment configuration: {exc}")
        return 1

    commands = {"new": cmd_new, "validate": cmd_validate, "combos": cmd_combos}
    try:
        return commands[args.command](args, config)
    except TemplateRenderError as exc:
        print_error(f"Internal error: {exc}")
        return 1
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
