"""Exportación JSON del registro resuelto.

Por qué JSON:
- Es el formato que consumen los clientes de registro y otros scripts.
- Permite inspeccionar lo que se reportaría sin levantar el cliente.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from core.domain.models import InstanceMetadata


def dump_record(record: Mapping[str, str]) -> str:
    """Serializa el registro con formato estable (claves ordenadas)."""

    payload = InstanceMetadata.from_record(record).as_record()
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_record_json(*, record: Mapping[str, str], output_path: Path) -> Path:
    """Exporta el registro a JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_record(record) + "\n", encoding="utf-8")
    return output_path
