"""Console rendering of a ``ValidationReport``."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..utils import console
from .models import GROUP_ORDER, Outcome, Severity, ValidationReport

_SEVERITY_STYLES = {
    Severity.PASS: ("green", "✔"),
    Severity.WARN: ("yellow", "⚠"),
    Severity.FAIL: ("red", "✘"),
}

_GROUP_TITLES = {
    "manifest": "Build manifest",
    "structure": "Source structure",
    "content": "Simulation quality",
}


def print_report(report: ValidationReport) -> None:
    """Pretty-print a validation report to the console using Rich."""
    console.print(f"\n[bold]Gatling Project Validator[/bold]  {escape(report.project_path)}\n")

    for group in GROUP_ORDER:
        results = report.by_group(group)
        if not results:
            continue
        table = Table(title=_GROUP_TITLES[group.value], title_justify="left", show_lines=False)
        table.add_column("", width=2)
        table.add_column("Rule", style="dim", no_wrap=True)
        table.add_column("Message")
        for result in results:
            style, icon = _SEVERITY_STYLES[result.severity]
            table.add_row(f"[{style}]{icon}[/{style}]", result.rule_id, escape(result.message))
        console.print(table)

    summary = (
        f"[green]✔ Passed:[/green]   {report.passed}\n"
        f"[yellow]⚠ Warnings:[/yellow] {report.warnings}\n"
        f"[red]✘ Errors:[/red]   {report.failures}"
    )
    if report.outcome is Outcome.FAILURE:
        verdict = "[bold red]Validation FAILED: fix errors above before running tests.[/bold red]"
        border = "red"
    elif report.warnings:
        verdict = "[bold yellow]Validation passed with warnings: consider addressing them.[/bold yellow]"
        border = "yellow"
    else:
        verdict = "[bold green]Validation PASSED: project looks good![/bold green]"
        border = "green"
    console.print(Panel(f"{summary}\n\n{verdict}", title="Summary", border_style=border))
