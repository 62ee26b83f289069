"""Fuentes de ubicación (proveedores concretos).

Por qué un paquete:
- Agrupa módulos por fuente (IP lookup, ubicación configurada, fake).
- Cada módulo implementa `core.interfaces.location.LocationProvider`.
"""

from __future__ import annotations

import httpx

from adapters.location_sources.fake import FakeLocationProvider
from adapters.location_sources.ip_lookup import IpLocationProvider
from adapters.location_sources.permission import (
    FixedPermissionPrompter,
    PermissionGate,
    PermissionState,
)
from adapters.location_sources.static import StaticLocationProvider
from core.config import AppSettings
from core.interfaces.location import LocationProvider, PermissionPrompter


def build_location_provider(
    settings: AppSettings,
    *,
    prompter: PermissionPrompter | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> LocationProvider:
    """Elige el proveedor según `settings.location_provider`."""

    if settings.location_provider == "static":
        return StaticLocationProvider.from_settings(settings)
    return IpLocationProvider(settings, prompter=prompter, transport=transport)


__all__ = [
    "FakeLocationProvider",
    "FixedPermissionPrompter",
    "IpLocationProvider",
    "PermissionGate",
    "PermissionState",
    "StaticLocationProvider",
    "build_location_provider",
]
