"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from gitpatrol import __version__


@click.group()
@click.version_option(version=__version__, prog_name="gitpatrol")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def main(verbose: bool) -> None:
    """GitPatrol — scan repositories for obfuscated JavaScript."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from gitpatrol.cli.scan import scan  # noqa: F811
    from gitpatrol.cli.server import server  # noqa: F811

    main.add_command(scan)
    main.add_command(server)


_register_commands()
