"""CLI command: gitpatrol scan <target> — scan a folder, zip or repository."""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from gitpatrol.config import GitPatrolConfig
from gitpatrol.connectors import describe_target
from gitpatrol.errors import GitPatrolError
from gitpatrol.scanner.engine import scan_target
from gitpatrol.scanner.models import Finding, ScanResult

console = Console()
err_console = Console(stderr=True)

_HEADERS = {
    "folder": "Analyzing folder:",
    "zip": "Analyzing zip file:",
    "github": "Analyzing GitHub repository:",
}

EXIT_CLEAN = 0
EXIT_SUSPICIOUS = 1
EXIT_ERROR = 2


@click.command()
@click.argument("target")
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the scan result as JSON.",
)
def scan(target: str, as_json: bool) -> None:
    """Scan TARGET for obfuscated JavaScript.

    TARGET is a directory, a .zip file or a GitHub repository URL
    (https://github.com/owner/repo).
    """
    try:
        config = GitPatrolConfig.load()
    except ValueError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(EXIT_ERROR)

    kind = describe_target(target)
    if not as_json:
        console.print(Rule(style="bright_blue"))
        header = _HEADERS.get(kind, "Analyzing:")
        console.print(
            f"[bold bright_blue]{header}[/bold bright_blue] "
            f"[yellow]{escape(target)}[/yellow]"
        )
        console.print(Rule(style="bright_blue"))

    on_finding = None if as_json else _print_finding
    try:
        result = scan_target(target, config=config, on_finding=on_finding)
    except (GitPatrolError, OSError) as e:
        err_console.print(f"\n[bold red]Error:[/bold red] {e}")
        sys.exit(EXIT_ERROR)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_summary(result)

    sys.exit(EXIT_SUSPICIOUS if result.any_suspicious else EXIT_CLEAN)


def _print_finding(finding: Finding) -> None:
    console.print("\n    [bold yellow]WARNING: Suspicious code detected![/bold yellow]")
    console.print(
        f"    [bright_blue]File:[/bright_blue] "
        f"[yellow]{escape(finding.file_path)}[/yellow]"
    )
    console.print(
        f"    [bright_blue]Line:[/bright_blue] [yellow]{finding.line_number}[/yellow]"
    )
    if finding.is_minified:
        console.print(
            f"      [red]Minified/obfuscated code (length:[/red] "
            f"[yellow]{finding.line_length}[/yellow] [red]chars)[/red]"
        )
    if finding.matched_patterns:
        console.print("      [red]Suspicious patterns found:[/red]")
        for pattern in finding.matched_patterns:
            console.print(
                f"        [yellow]->[/yellow] [bright_red]{escape(pattern)}[/bright_red]"
            )
    console.print(Rule(style="dim"))


def _print_summary(result: ScanResult) -> None:
    for path in result.large_files:
        console.print(f"[yellow]Large file (over 1 MB):[/yellow] {escape(path)}")

    if not result.has_manifest:
        console.print("[dim]No package.json found at the source root.[/dim]")

    console.print(
        f"\nScanned {result.files_scanned} files "
        f"({result.files_skipped} skipped) "
        f"in {result.duration:.2f}s"
    )
    console.print(Rule(style="bright_blue"))
    if result.any_suspicious:
        verdict = "[bold red]Suspicious patterns detected[/bold red]"
    else:
        verdict = "[bold green]No suspicious patterns found[/bold green]"
    console.print(f"  [bold bright_blue]Analysis Result:[/bold bright_blue] {verdict}")
    console.print(Rule(style="bright_blue"))
