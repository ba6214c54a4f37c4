"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.fields import MetadataField


def print_banner(console: Console) -> None:
    """Imprime el banner (solo en modo interactivo, nunca con --json)."""

    title = Text("fargate-metadata", style="bold cyan")
    subtitle = Text("ECS task metadata • Eureka AmazonInfo", style="dim")
    console.print(Panel(Text.assemble(title, "\n", subtitle), border_style="cyan", padding=(0, 2)))


def build_metadata_table(record: Mapping[str, str]) -> Table:
    """Tabla con los once campos; los no resueltos se muestran como ausentes."""

    table = Table(title="Instance Metadata")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Label", style="dim", no_wrap=True)
    table.add_column("Value", style="white")
    for field in MetadataField:
        value = record.get(field.value)
        if value:
            table.add_row(field.value, field.label(), value)
        else:
            table.add_row(field.value, field.label(), Text("absent", style="dim red"))
    return table
