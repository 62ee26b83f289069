"""Contratos de adquisición de ubicación.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que la fuente real (IP lookup, ubicación configurada) y el fake de
  tests sean intercambiables sin acoplar el Core a una plataforma.
"""

from __future__ import annotations

from typing import Awaitable, Protocol, runtime_checkable

from core.domain.models import Coordinates, LocationRequestOptions


@runtime_checkable
class LocationProvider(Protocol):
    """Adquisición one-shot de las coordenadas del dispositivo.

    Reglas de diseño:
    - La llamada en sí es síncrona y devuelve un awaitable: si la plataforma
      no ofrece ninguna capacidad de ubicación, lanza
      `LocationError(UNSUPPORTED)` de inmediato, antes de devolverlo.
    - El awaitable completa exactamente una vez: `Coordinates` o
      `LocationError`. Nunca emite varias actualizaciones.
    - El proveedor aplica su propio timeout (`options.timeout_ms`).
    """

    def request_current_location(
        self, options: LocationRequestOptions
    ) -> Awaitable[Coordinates]:
        ...


@runtime_checkable
class PermissionPrompter(Protocol):
    """Pregunta al usuario si concede acceso a su ubicación.

    Devuelve `True` si se concede. Se invoca como máximo una vez por
    petición, y solo mientras el permiso esté sin decidir.
    """

    def request_permission(self) -> bool:
        ...
