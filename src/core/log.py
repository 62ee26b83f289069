"""Inicialización de logging.

Por qué Rich:
- La CLI ya usa Rich para la salida; `RichHandler` mantiene los logs legibles
  en stderr sin mezclarse con el panel de resultados.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Configura el logger raíz una sola vez (idempotente)."""

    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    # httpx loguea cada request en INFO.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
