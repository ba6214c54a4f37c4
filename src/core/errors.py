"""Errores internos del Core.

Estas excepciones nunca cruzan la frontera del fetcher: se convierten en un
`FetchResult` fallido para que el registro del servicio no se interrumpa.
"""

from __future__ import annotations


class MetadataError(Exception):
    """Base de los errores de metadata."""


class MetadataFetchError(MetadataError):
    """Fallo al pedir el documento (red, timeout, status != 200, cuerpo inválido)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
