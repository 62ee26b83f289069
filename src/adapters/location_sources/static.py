"""Fuente de ubicación: coordenadas configuradas por el usuario.

Útil en equipos sin geolocalización (servidores, CI) o para fijar una
ubicación conocida vía `.env` (`GENZAICHI_STATIC_LATITUDE`/`_LONGITUDE`).
"""

from __future__ import annotations

from typing import Awaitable

from core.config import AppSettings
from core.domain.errors import LocationError, LocationErrorKind
from core.domain.models import Coordinates, LocationRequestOptions
from core.interfaces.location import LocationProvider


class StaticLocationProvider(LocationProvider):
    def __init__(self, coordinates: Coordinates | None) -> None:
        self._coordinates = coordinates

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "StaticLocationProvider":
        if settings.static_latitude is None or settings.static_longitude is None:
            return cls(None)
        return cls(
            Coordinates(
                latitude=settings.static_latitude,
                longitude=settings.static_longitude,
            )
        )

    def request_current_location(
        self, options: LocationRequestOptions
    ) -> Awaitable[Coordinates]:
        if self._coordinates is None:
            raise LocationError(LocationErrorKind.UNSUPPORTED, "no static location configured")
        return self._resolve(self._coordinates)

    async def _resolve(self, coordinates: Coordinates) -> Coordinates:
        return coordinates
