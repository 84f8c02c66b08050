"""CLI command: sbomfix server — start the HTTP API."""

from __future__ import annotations

import click
import uvicorn
from rich.console import Console

from sbomfix.config import SbomFixConfig

console = Console(stderr=True)


@click.command()
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to listen on (default: 3000, or $PORT).",
)
@click.option("--host", default=None, help="Interface to bind (default: 127.0.0.1).")
def server(port: int | None, host: str | None) -> None:
    """Start the sbomfix API server."""
    config = SbomFixConfig.load()
    if port is not None:
        config.web_port = port
    if host is not None:
        config.web_host = host

    console.print(
        f"[bold]sbomfix[/bold] API starting on "
        f"[cyan]http://{config.web_host}:{config.web_port}[/cyan]"
    )
    if config.static_dir.is_dir():
        console.print(f"  [dim]Serving static files from {config.static_dir}[/dim]\n")

    from sbomfix.web.app import create_app

    app = create_app(config)
    uvicorn.run(app, host=config.web_host, port=config.web_port, log_level="info")
