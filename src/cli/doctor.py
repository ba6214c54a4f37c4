"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from core.config import AppSettings
from core.services.metadata_resolver import InstanceMetadataResolver, metadata_url

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


@app.command()
def run() -> None:
    """Show the effective configuration and probe the metadata endpoint."""

    settings = AppSettings()
    resolver = InstanceMetadataResolver(settings)
    schema = resolver.schema
    url = metadata_url(settings, schema)

    table = Table(title="fargate-metadata Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Schema", "OK", schema.version)
    if url:
        table.add_row("Endpoint", "OK", url)
    else:
        table.add_row("Endpoint", "MISSING", f"{schema.env_var} is not set -> empty metadata")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    if url:
        result = asyncio.run(resolver.fetcher.fetch())
        if result.ok:
            keys = ", ".join(sorted((result.document or {}).keys())[:6])
            table.add_row("Endpoint reachable", "OK", f"HTTP {result.status_code} ({keys})")
        else:
            table.add_row("Endpoint reachable", "FAIL", result.error or "unknown error")

    _console.print(table)

    if not url:
        _console.print(
            "\n[yellow]Note:[/yellow] Outside ECS the endpoint variable is unset; "
            "only instance-type and vpc-id will be reported."
        )
