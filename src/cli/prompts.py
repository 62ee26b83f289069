"""Prompts interactivos de la CLI."""

from __future__ import annotations

import typer

from core.domain.messages import PERMISSION_PROMPT
from core.interfaces.location import PermissionPrompter


class ConsolePermissionPrompter(PermissionPrompter):
    """Pregunta en la terminal si se concede acceso a la ubicación."""

    def request_permission(self) -> bool:
        # stderr: stdout queda reservado para `--json`.
        return typer.confirm(PERMISSION_PROMPT, default=True, err=True)
