"""CLI command: gitpatrol server — start the web scanning endpoint."""

from __future__ import annotations

import click
from rich.console import Console

from gitpatrol.config import GitPatrolConfig

console = Console(stderr=True)


@click.command()
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to listen on (default: 8471).",
)
def server(port: int | None) -> None:
    """Start the GitPatrol web scanning endpoint."""
    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]Web dependencies not installed.[/red]\n"
            "Install with: pip install gitpatrol[web]"
        )
        raise SystemExit(1)

    config = GitPatrolConfig.load()
    if port is not None:
        config.web_port = port

    console.print(
        f"[bold]GitPatrol[/bold] web endpoint starting on "
        f"[cyan]http://{config.web_host}:{config.web_port}[/cyan]"
    )

    from gitpatrol.web.app import create_app

    uvicorn.run(
        create_app(),
        host=config.web_host,
        port=config.web_port,
        log_level="info",
    )
