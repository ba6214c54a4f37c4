"""Contratos de fuentes de metadata.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que cada versión del esquema del endpoint (v4 hoy, otras en el
  futuro) aporte su propio fetcher y sus reglas sin acoplar el resolver a
  implementaciones concretas.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from core.domain.fields import MetadataField
from core.domain.models import FetchResult, RawMetadataDocument

ExtractionRule = Callable[[Mapping[str, Any]], Any]


@runtime_checkable
class MetadataFetcher(Protocol):
    """Contrato mínimo para obtener el documento crudo.

    Reglas de diseño:
    - `fetch` es asíncrono porque hace I/O (HTTP) y nunca lanza excepciones.
    - `snapshot` es un accessor puro del último documento válido.
    """

    @property
    def in_flight(self) -> bool:
        ...

    def prefetch(self) -> asyncio.Task[FetchResult]:
        """Lanza el fetch sin esperarlo (o devuelve el que ya está en curso)."""

        ...

    async def fetch(self) -> FetchResult:
        """Pide el documento al endpoint (compartiendo la petición en curso)."""

        ...

    def snapshot(self) -> RawMetadataDocument | None:
        """Devuelve el documento cacheado o None si no hay ninguno."""

        ...


@runtime_checkable
class MetadataSchema(Protocol):
    """Una versión del esquema del endpoint: URL de entorno + reglas por campo."""

    version: str
    env_var: str

    def rules(self) -> Mapping[MetadataField, ExtractionRule]:
        ...
