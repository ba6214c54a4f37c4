"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El documento crudo del endpoint es propiedad del proveedor; aquí solo
  describimos el resultado de pedirlo y el registro ya normalizado.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

RawMetadataDocument = dict[str, Any]
ResolvedMetadataRecord = dict[str, str]


class FetchResult(BaseModel):
    """Resultado (éxito o fallo) de una petición al metadata endpoint.

    Por qué un modelo y no una excepción:
    - El fallo de metadata es un estado válido (best-effort), no un error del
      llamador; así nunca interrumpe el registro del servicio.
    """

    ok: bool = Field(
        default=False,
        description="True solo con HTTP 200 y un cuerpo JSON válido.",
    )
    url: str | None = Field(
        default=None,
        description="URL consultada (None si no hay endpoint configurado).",
    )
    status_code: int | None = Field(
        default=None,
        description="Código HTTP recibido, si hubo respuesta.",
    )
    document: RawMetadataDocument | None = Field(
        default=None,
        description="Documento crudo tal como lo devuelve el endpoint.",
    )
    error: str | None = Field(
        default=None,
        description="Descripción del fallo (red, status, parseo).",
    )
    fetched_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Momento de la petición (UTC).",
    )

    @classmethod
    def failure(cls, *, url: str | None, error: str, status_code: int | None = None) -> "FetchResult":
        return cls(ok=False, url=url, status_code=status_code, error=error)


class InstanceMetadata(BaseModel):
    """Registro normalizado que consume el cliente de registro (Eureka).

    Todos los campos son opcionales: un campo sin dato se omite al exportar,
    nunca se serializa como null.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    ami_id: str | None = Field(default=None, alias="ami-id")
    instance_id: str | None = Field(default=None, alias="instance-id")
    instance_type: str | None = Field(default=None, alias="instance-type")
    local_ipv4: str | None = Field(default=None, alias="local-ipv4")
    local_hostname: str | None = Field(default=None, alias="local-hostname")
    availability_zone: str | None = Field(default=None, alias="availability-zone")
    public_hostname: str | None = Field(default=None, alias="public-hostname")
    public_ipv4: str | None = Field(default=None, alias="public-ipv4")
    mac: str | None = Field(default=None, alias="mac")
    vpc_id: str | None = Field(default=None, alias="vpc-id")
    account_id: str | None = Field(default=None, alias="accountId")

    @classmethod
    def from_record(cls, record: Mapping[str, str]) -> "InstanceMetadata":
        return cls.model_validate(dict(record))

    def as_record(self) -> ResolvedMetadataRecord:
        """Devuelve el registro disperso (solo claves resueltas)."""

        data = self.model_dump(by_alias=True, exclude_none=True)
        return {key: value for key, value in data.items() if value}
