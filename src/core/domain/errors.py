"""Taxonomía de errores del Core.

Por qué excepciones propias:
- Los adaptadores traducen fallos de plataforma/HTTP a un vocabulario
  estable; el `FlowController` solo conoce estos tipos.
- La distinción NetworkError / ServiceError no llega al usuario, pero queda
  disponible para logging y diagnóstico.
"""

from __future__ import annotations

from enum import Enum


class LocationErrorKind(str, Enum):
    """Motivo de fallo de una adquisición de ubicación."""

    PERMISSION_DENIED = "permission_denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


class LocationError(Exception):
    """Fallo de `LocationProvider.request_current_location`."""

    def __init__(self, kind: LocationErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        message = kind.value if not detail else f"{kind.value}: {detail}"
        super().__init__(message)


class GeocodingError(Exception):
    """Base de los fallos de reverse geocoding."""


class NetworkError(GeocodingError):
    """Fallo de transporte (DNS, conexión, timeout) o JSON malformado."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"network error: {cause!r}")


class ServiceError(GeocodingError):
    """El servicio respondió con un status HTTP no exitoso."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"geocoding service returned HTTP {status_code}")
