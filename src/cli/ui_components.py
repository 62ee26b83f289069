"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- La capa de presentación solo lee snapshots de `FlowState`; nunca decide
  transiciones.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from core.domain.messages import (
    ADDRESS_LABEL,
    LATITUDE_LABEL,
    LONGITUDE_LABEL,
    SECTION_TITLE,
)
from core.domain.models import FlowState, FlowStatus


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("genzaichi", style="bold cyan")
    subtitle = Text("現在地 • 住所推定", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_status_line(state: FlowState) -> Text | None:
    """Línea de progreso para estados intermedios (None si no hay texto)."""

    if not state.status_text:
        return None
    return Text(state.status_text, style="dim")


def build_state_panel(state: FlowState) -> Panel:
    """Panel con estado, error, coordenadas y dirección estimada."""

    body = Text()
    if state.status_text:
        body.append(state.status_text + "\n", style="bold")
    if state.error_message:
        body.append(state.error_message + "\n", style="red")
    if state.coordinates is not None:
        body.append(f"{LATITUDE_LABEL}: ")
        body.append(f"{state.latitude_text}\n", style="bold white")
        body.append(f"{LONGITUDE_LABEL}: ")
        body.append(f"{state.longitude_text}\n", style="bold white")
    if state.formatted_address:
        body.append(f"{ADDRESS_LABEL}: ")
        body.append(state.formatted_address, style="bold")

    border = "red" if state.status is FlowStatus.ERROR else "green"
    title = Text(SECTION_TITLE, style="bold yellow")
    return Panel(body, title=title, border_style=border)
