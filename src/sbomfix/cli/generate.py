"""CLI command: sbomfix generate <source> — build and store an SBOM."""

from __future__ import annotations

import click
from rich.console import Console

from sbomfix.config import SbomFixConfig
from sbomfix.errors import SbomFixError
from sbomfix.service import RemediationService

console = Console(stderr=True)


@click.command()
@click.argument("source")
def generate(source: str) -> None:
    """Generate a CycloneDX SBOM for SOURCE (path, image or git URL)."""
    config = SbomFixConfig.load()
    service = RemediationService.from_config(config)
    try:
        with console.status(f"Generating SBOM for [cyan]{source}[/cyan]..."):
            handle, _content = service.generate_sbom(source)
    except SbomFixError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1)
    finally:
        service.close()

    console.print("[green]SBOM generated successfully[/green]")
    console.print(f"  id:   [cyan]{handle.digest}[/cyan]")
    console.print(f"  file: {handle.path}")
