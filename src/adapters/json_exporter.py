"""Exportación JSON del estado del flujo.

Por qué JSON:
- Interoperabilidad con scripts y pipelines (`genzaichi locate --json`).
- Incluye los valores derivados (texto de estado, coordenadas a seis
  decimales, dirección formateada) tal como los ve la presentación.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import FlowState


def render_state_json(state: FlowState) -> str:
    """Serializa un snapshot a JSON UTF-8 con formato estable."""

    payload = state.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_state_json(*, state: FlowState, output_path: Path) -> Path:
    """Exporta `FlowState` a un fichero JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_state_json(state), encoding="utf-8")
    return output_path
