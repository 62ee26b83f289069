"""Contrato de reverse geocoding."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Address, Coordinates


@runtime_checkable
class GeocodingClient(Protocol):
    """Convierte coordenadas en una `Address` normalizada.

    Reglas de diseño:
    - `reverse_geocode` es asíncrono porque hace I/O (HTTP).
    - Lanza `ServiceError` ante status no exitoso y `NetworkError` ante fallos
      de transporte o JSON malformado.
    - Una respuesta sin objeto `address` no es un error: todos los campos `""`.
    """

    async def reverse_geocode(self, coordinates: Coordinates, language_tag: str) -> Address:
        ...
