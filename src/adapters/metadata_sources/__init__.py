"""Fuentes de metadata (una por versión del esquema del endpoint).

Por qué un paquete:
- Agrupa módulos por versión del esquema (v4 hoy).
- Cada módulo implementa `core.interfaces.fetcher.MetadataSchema`; añadir
  una versión es añadir un módulo y registrarlo en `_SCHEMAS`.
"""

from adapters.metadata_sources.ecs_task_v4 import EcsTaskMetadataV4
from core.interfaces.fetcher import MetadataSchema

_SCHEMAS: dict[str, MetadataSchema] = {
	EcsTaskMetadataV4.version: EcsTaskMetadataV4(),
}


def get_schema(version: str) -> MetadataSchema:
	"""Devuelve el esquema registrado para `version` (p.ej. 'v4')."""

	try:
		return _SCHEMAS[version.strip().lower()]
	except KeyError:
		raise ValueError(f"unsupported metadata schema {version!r}") from None


__all__ = [
	"EcsTaskMetadataV4",
	"get_schema",
]
