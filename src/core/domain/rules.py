"""Reglas de extracción reutilizables.

Cada regla es una función pura `documento -> valor | None`: no hace I/O ni
muta el documento. Las versiones del esquema componen estas piezas.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence


class ConstantRule:
    """Regla que ignora el documento y devuelve siempre el mismo literal."""

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        self.value = value

    def __call__(self, document: Mapping[str, Any]) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"ConstantRule({self.value!r})"


def constant(value: str) -> ConstantRule:
    return ConstantRule(value)


def first_item(value: Any) -> Any:
    """Si `value` es una secuencia (no texto), devuelve su primer elemento."""

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return value[0] if value else None
    return value


def lookup_key(key: str) -> Callable[[Mapping[str, Any]], Any]:
    """Lectura directa de una clave en la raíz del documento."""

    def rule(document: Mapping[str, Any]) -> Any:
        return document.get(key)

    rule.__name__ = f"lookup_key[{key}]"
    return rule


def first_entry(document: Mapping[str, Any], collection: str) -> Mapping[str, Any] | None:
    """Primer descriptor de una lista de objetos (p.ej. `Networks`)."""

    entries = document.get(collection)
    if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)) or not entries:
        return None
    head = entries[0]
    return head if isinstance(head, Mapping) else None


def lookup_first_entry_key(collection: str, key: str) -> Callable[[Mapping[str, Any]], Any]:
    """Clave del primer descriptor de `collection`; si es lista, su primer valor."""

    def rule(document: Mapping[str, Any]) -> Any:
        entry = first_entry(document, collection)
        if entry is None:
            return None
        return first_item(entry.get(key))

    rule.__name__ = f"lookup_first_entry_key[{collection}.{key}]"
    return rule


def delimited_segment(
    key: str,
    *,
    index: int,
    delimiter: str = ":",
    min_segments: int | None = None,
) -> Callable[[Mapping[str, Any]], Any]:
    """Segmento `index` de un identificador delimitado (p.ej. un ARN).

    Devuelve None si el identificador falta o tiene menos de `min_segments`
    segmentos (por defecto `index + 1`).
    """

    required = min_segments if min_segments is not None else index + 1

    def rule(document: Mapping[str, Any]) -> Any:
        identifier = document.get(key)
        if not isinstance(identifier, str) or not identifier:
            return None
        segments = identifier.split(delimiter)
        if len(segments) < required:
            return None
        return segments[index]

    rule.__name__ = f"delimited_segment[{key}:{index}]"
    return rule
