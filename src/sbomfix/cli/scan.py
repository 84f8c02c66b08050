"""CLI command: sbomfix scan — scan an SBOM and print a remediation script."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from sbomfix.config import SbomFixConfig
from sbomfix.errors import SbomFixError
from sbomfix.service import RemediationService

console = Console(stderr=True)

_ENGINE_COLORS = {
    "semantic": "green",
    "generative": "cyan",
    "static": "yellow",
}


@click.command()
@click.option(
    "--sbom",
    "sbom_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="SBOM file to scan (default: the most recently generated one).",
)
@click.option(
    "--advanced",
    "-a",
    is_flag=True,
    help="Try the LlamaIndex semantic-analysis backend first.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the remediation commands to this file.",
)
def scan(sbom_path: str | None, advanced: bool, output: str | None) -> None:
    """Scan an SBOM with grype and generate a remediation script."""
    config = SbomFixConfig.load()
    service = RemediationService.from_config(config)
    try:
        with console.status("Scanning SBOM..."):
            report = service.scan(sbom_path=sbom_path, use_advanced=advanced)
    except SbomFixError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1)
    finally:
        service.close()

    result = report.remediation
    if result.engine is None:
        console.print("[green]No fixable vulnerabilities found.[/green]")
        return

    table = Table(title="Scan summary", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("SBOM", str(report.sbom.path))
    table.add_row("Package type", report.ecosystem.label)
    table.add_row("Quality score", _format_quality(report))
    color = _ENGINE_COLORS.get(result.engine.value, "white")
    table.add_row("Engine", f"[{color}]{result.engine.value}[/{color}]")
    console.print(table)

    if result.warning:
        console.print(f"[yellow]warning:[/yellow] {result.warning}")

    commands = result.commands or result.script
    console.print(Syntax(commands, "bash", word_wrap=True))

    if output:
        Path(output).write_text(commands, encoding="utf-8")
        console.print(f"\nRemediation script written to [cyan]{output}[/cyan]")


def _format_quality(report) -> str:
    quality = report.quality
    if quality is None or quality.value is None:
        detail = f" ({quality.detail})" if quality and quality.detail else ""
        return f"unavailable{detail}"
    return f"{quality.value:.1f} ({quality.source.value})"
