"""Gate de permiso de ubicación.

Contrato (convención de plataforma):
- Mientras el permiso está sin decidir, cada petición puede preguntar una vez.
- Una vez respondido, la decisión se recuerda durante la vida del proveedor
  y no se vuelve a preguntar.
"""

from __future__ import annotations

import logging
from enum import Enum

from core.interfaces.location import PermissionPrompter

logger = logging.getLogger(__name__)


class PermissionState(str, Enum):
    PROMPT = "prompt"
    GRANTED = "granted"
    DENIED = "denied"


class FixedPermissionPrompter(PermissionPrompter):
    """Prompter no interactivo con respuesta fija (tests, `--yes`)."""

    def __init__(self, granted: bool = True) -> None:
        self.granted = granted
        self.calls = 0

    def request_permission(self) -> bool:
        self.calls += 1
        return self.granted


class PermissionGate:
    """Estado del permiso + prompter inyectable.

    Sin prompter no hay a quién preguntar: el permiso se considera concedido
    (entornos no interactivos).
    """

    def __init__(
        self,
        prompter: PermissionPrompter | None = None,
        *,
        state: PermissionState | None = None,
    ) -> None:
        self._prompter = prompter
        if state is None:
            state = PermissionState.PROMPT if prompter is not None else PermissionState.GRANTED
        self._state = state

    @property
    def state(self) -> PermissionState:
        return self._state

    def resolve(self) -> bool:
        """Decide el permiso (preguntando si hace falta) sin lanzar."""

        if self._state is PermissionState.PROMPT and self._prompter is not None:
            granted = bool(self._prompter.request_permission())
            self._state = PermissionState.GRANTED if granted else PermissionState.DENIED
            logger.debug("location permission %s", self._state.value)
        return self._state is PermissionState.GRANTED
