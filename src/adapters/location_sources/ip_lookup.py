"""Fuente de ubicación: geolocalización por IP.

Implementación:
- Pregunta el permiso (gate) antes de cualquier uso de red.
- GET al endpoint JSON configurado (por defecto ipapi.co) y lee
  `latitude`/`longitude` (o `lat`/`lon`).
- Aplica el timeout propio de la petición (`options.timeout_ms`).

Notas:
- La precisión es de ciudad: `high_accuracy` no puede honrarse.
- `force_fresh` envía `Cache-Control: no-cache` para evitar respuestas cacheadas.
- Sin endpoint configurado la capacidad no existe => `UNSUPPORTED` inmediato.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable

import httpx

from adapters.http_client import build_async_client
from adapters.location_sources.permission import PermissionGate
from core.config import AppSettings
from core.domain.errors import LocationError, LocationErrorKind
from core.domain.models import Coordinates, LocationRequestOptions
from core.interfaces.location import LocationProvider, PermissionPrompter

logger = logging.getLogger(__name__)


def _pick(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


class IpLocationProvider(LocationProvider):
    """Ubicación aproximada a partir de la IP pública."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        prompter: PermissionPrompter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._gate = PermissionGate(prompter)
        self._transport = transport

    @property
    def permission(self) -> PermissionGate:
        return self._gate

    def request_current_location(
        self, options: LocationRequestOptions
    ) -> Awaitable[Coordinates]:
        endpoint = self._settings.ip_location_url.strip()
        if not endpoint:
            raise LocationError(LocationErrorKind.UNSUPPORTED, "ip_location_url is not configured")
        # El prompt (bloqueante) se resuelve aquí, fuera del event loop.
        granted = self._gate.resolve()
        return self._acquire(endpoint, options, granted)

    async def _acquire(
        self, endpoint: str, options: LocationRequestOptions, granted: bool
    ) -> Coordinates:
        if not granted:
            raise LocationError(LocationErrorKind.PERMISSION_DENIED)
        if options.high_accuracy:
            logger.debug("IP lookup is city-level; high_accuracy is ignored")
        try:
            return await asyncio.wait_for(
                self._lookup(endpoint, options),
                timeout=options.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise LocationError(
                LocationErrorKind.TIMEOUT,
                f"no fix within {options.timeout_ms} ms",
            ) from exc

    async def _lookup(self, endpoint: str, options: LocationRequestOptions) -> Coordinates:
        headers = {"Cache-Control": "no-cache"} if options.force_fresh else None
        try:
            async with build_async_client(
                self._settings, extra_headers=headers, transport=self._transport
            ) as client:
                response = await client.get(endpoint)
        except httpx.TimeoutException as exc:
            raise LocationError(LocationErrorKind.TIMEOUT, str(exc)) from exc
        except httpx.HTTPError as exc:
            raise LocationError(LocationErrorKind.UNAVAILABLE, str(exc)) from exc

        if not response.is_success:
            raise LocationError(LocationErrorKind.UNAVAILABLE, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise LocationError(LocationErrorKind.UNAVAILABLE, "malformed JSON") from exc
        if not isinstance(data, dict):
            raise LocationError(LocationErrorKind.UNAVAILABLE, "unexpected payload")

        lat = _pick(data, "latitude", "lat")
        lon = _pick(data, "longitude", "lon")
        if lat is None or lon is None:
            reason = data.get("reason") or "missing coordinates"
            raise LocationError(LocationErrorKind.UNAVAILABLE, str(reason))

        try:
            return Coordinates(latitude=float(lat), longitude=float(lon))
        except (TypeError, ValueError) as exc:
            raise LocationError(LocationErrorKind.UNKNOWN, f"invalid coordinates {lat!r}, {lon!r}") from exc
