"""CLI principal (Typer).

Comandos:
- `resolve`: pide la metadata del task y muestra el registro resuelto.
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from adapters.json_exporter import dump_record, export_record_json
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import build_metadata_table, print_banner
from core.config import AppSettings
from core.services.metadata_resolver import InstanceMetadataResolver

app = typer.Typer(
    no_args_is_help=True,
    help="Resolve ECS Fargate task metadata for service registration.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.command()
def resolve(
    json_output: bool = typer.Option(False, "--json", help="Print the record as JSON (no banner/table)."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the record to a JSON file."),
    url: str | None = typer.Option(None, "--url", help="Override the metadata endpoint URL."),
    no_constants: bool = typer.Option(
        False,
        "--no-constants",
        help="Do not report instance-type/vpc-id when no metadata document is available.",
    ),
) -> None:
    """Fetch the task metadata document and print the resolved record."""

    settings = AppSettings()
    overrides: dict[str, object] = {}
    if url:
        overrides["metadata_uri"] = url
    if no_constants:
        overrides["include_constants_without_document"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)

    resolver = InstanceMetadataResolver(settings)
    record = asyncio.run(resolver.resolve())

    if output:
        path = export_record_json(record=record, output_path=output)
        if not json_output:
            _console.print(f"[green]Saved metadata to:[/green] {path}")

    if json_output:
        typer.echo(dump_record(record))
        return

    print_banner(_console)
    _console.print(build_metadata_table(record))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
