"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from sbomfix import __version__


@click.group()
@click.version_option(version=__version__, prog_name="sbomfix")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """sbomfix — SBOM vulnerability scanning and remediation scripts."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from sbomfix.cli.generate import generate  # noqa: F811
    from sbomfix.cli.scan import scan  # noqa: F811
    from sbomfix.cli.server import server  # noqa: F811

    main.add_command(generate)
    main.add_command(scan)
    main.add_command(server)


_register_commands()
