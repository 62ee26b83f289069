"""Reverse geocoding con Nominatim (OpenStreetMap).

Implementación:
- GET `/reverse?format=jsonv2&lat=..&lon=..&addressdetails=1&accept-language=..`
  con `Accept: application/json`.
- Normaliza el objeto `address` a prefectura / ciudad / barrio con cadenas de
  fallback deterministas.

Notas:
- status != 2xx => `ServiceError(status)`
- transporte o JSON roto => `NetworkError(cause)`
- sin `address` => todos los campos `""` (Nominatim responde 200 con
  `{"error": "Unable to geocode"}` en mitad del océano).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import NetworkError, ServiceError
from core.domain.models import Address, Coordinates
from core.interfaces.geocoding import GeocodingClient

logger = logging.getLogger(__name__)

PREFECTURE_KEYS: tuple[str, ...] = ("state", "region")
CITY_KEYS: tuple[str, ...] = ("city", "town", "village")
TOWN_KEYS: tuple[str, ...] = ("suburb", "neighbourhood", "hamlet")


def _first_present(data: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = data.get(key)
        # "" cuenta como ausente: seguimos con el siguiente candidato.
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def normalize_address(payload: object) -> Address:
    """Extrae y normaliza `payload["address"]`; nunca lanza."""

    raw = payload.get("address") if isinstance(payload, dict) else None
    if not isinstance(raw, dict):
        return Address()
    return Address(
        prefecture=_first_present(raw, PREFECTURE_KEYS),
        city=_first_present(raw, CITY_KEYS),
        town=_first_present(raw, TOWN_KEYS),
    )


def _plain_decimal(value: float) -> str:
    # Sin notación exponencial: 1e-05 -> "0.00001".
    return format(Decimal(repr(float(value))), "f")


def build_reverse_params(coordinates: Coordinates, language_tag: str) -> dict[str, str]:
    return {
        "format": "jsonv2",
        "lat": _plain_decimal(coordinates.latitude),
        "lon": _plain_decimal(coordinates.longitude),
        "addressdetails": "1",
        "accept-language": language_tag,
    }


class NominatimGeocodingClient(GeocodingClient):
    """Cliente de reverse geocoding contra una API compatible Nominatim."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def reverse_geocode(self, coordinates: Coordinates, language_tag: str) -> Address:
        url = self._settings.reverse_geocode_url
        params = build_reverse_params(coordinates, language_tag)

        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(exc) from exc

        if not response.is_success:
            raise ServiceError(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError(exc) from exc

        address = normalize_address(payload)
        logger.debug("reverse geocoded %s -> %r", params, address)
        return address
