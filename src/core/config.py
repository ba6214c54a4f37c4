"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El endpoint de metadata lo inyecta el agente de ECS en cada contenedor
  (`ECS_CONTAINER_METADATA_URI_V4`); nunca se hardcodea.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

METADATA_URI_ENV = "ECS_CONTAINER_METADATA_URI_V4"
SUPPORTED_SCHEMA_VERSIONS: tuple[str, ...] = ("v4",)


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="FARGATE_METADATA_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    metadata_uri: str | None = Field(
        default=None,
        validation_alias=AliasChoices(METADATA_URI_ENV, "FARGATE_METADATA_METADATA_URI"),
        description="Base URL del task metadata endpoint (la inyecta el agente de ECS).",
    )
    schema_version: str = Field(
        default="v4",
        description="Versión del esquema de metadata a interpretar.",
    )
    http_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="fargate-metadata/0.1",
        min_length=1,
        description="User-Agent para las peticiones al endpoint.",
    )
    include_constants_without_document: bool = Field(
        default=True,
        description="Reportar instance-type/vpc-id aunque no haya documento de metadata.",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging para la CLI.",
    )

    @field_validator("metadata_uri")
    @classmethod
    def _blank_uri_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("schema_version")
    @classmethod
    def _known_schema(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in SUPPORTED_SCHEMA_VERSIONS:
            raise ValueError(
                f"unsupported metadata schema {value!r} (supported: {', '.join(SUPPORTED_SCHEMA_VERSIONS)})"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()

