"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta (rangos de latitud/longitud) y documentación
  autocontenida (Field) sin acoplar el Core a librerías de I/O.
- `frozen=True` garantiza que coordenadas, direcciones y snapshots de estado
  no se mutan campo a campo: se reemplazan completos.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field, model_validator
from pydantic.config import ConfigDict

from core.domain.messages import status_text_for

_SIX_PLACES = Decimal("0.000001")


def format_degrees(value: float) -> str:
    """Formatea grados con seis decimales (redondeo half-up sobre el valor decimal).

    `35.6895123` -> `"35.689512"`.
    """

    return str(Decimal(repr(float(value))).quantize(_SIX_PLACES, rounding=ROUND_HALF_UP))


class Coordinates(BaseModel):
    """Par (latitud, longitud) producido por un `LocationProvider`."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(
        ...,
        ge=-90.0,
        le=90.0,
        description="Latitud en grados decimales.",
    )
    longitude: float = Field(
        ...,
        ge=-180.0,
        le=180.0,
        description="Longitud en grados decimales.",
    )

    @property
    def latitude_text(self) -> str:
        return format_degrees(self.latitude)

    @property
    def longitude_text(self) -> str:
        return format_degrees(self.longitude)


class Address(BaseModel):
    """Dirección normalizada (prefectura / ciudad / barrio).

    Por qué strings vacíos en vez de None:
    - Un campo no resuelto está presente como `""`; la presentación solo
      necesita saltarse segmentos vacíos.
    """

    model_config = ConfigDict(frozen=True)

    prefecture: str = Field(default="", description="Prefectura / estado / región.")
    city: str = Field(default="", description="Ciudad, pueblo o aldea.")
    town: str = Field(default="", description="Barrio, vecindario o caserío.")

    def formatted(self) -> str:
        """Une los segmentos no vacíos con un único espacio."""

        parts = [p for p in (self.prefecture, self.city, self.town) if p]
        return " ".join(parts)


def format_address(address: Address | None) -> str:
    if address is None:
        return ""
    return address.formatted()


class FlowStatus(str, Enum):
    """Estados de la máquina de estados del flujo."""

    IDLE = "idle"
    ACQUIRING_LOCATION = "acquiring_location"
    ACQUIRING_ADDRESS = "acquiring_address"
    SUCCESS = "success"
    ERROR = "error"


class LocationRequestOptions(BaseModel):
    """Opciones de una petición one-shot de ubicación."""

    model_config = ConfigDict(frozen=True)

    high_accuracy: bool = Field(
        default=True,
        description="Pide la mejor precisión que ofrezca la plataforma.",
    )
    timeout_ms: int = Field(
        default=10_000,
        gt=0,
        description="Timeout propio del proveedor (milisegundos).",
    )
    force_fresh: bool = Field(
        default=True,
        description="No aceptar una posición cacheada (maximumAge = 0).",
    )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


class FlowState(BaseModel):
    """Snapshot inmutable del estado de la sesión.

    Por qué validar invariantes aquí:
    - El status determina qué campos tienen sentido; un snapshot incoherente
      es un bug del controlador y debe fallar en el momento de construirse.
    """

    model_config = ConfigDict(frozen=True)

    status: FlowStatus = Field(default=FlowStatus.IDLE)
    coordinates: Coordinates | None = Field(default=None)
    address: Address | None = Field(default=None)
    error_message: str | None = Field(default=None)

    @model_validator(mode="after")
    def _check_status_invariants(self) -> "FlowState":
        status = self.status
        if status is FlowStatus.SUCCESS:
            if self.address is None or self.error_message is not None:
                raise ValueError("success requires an address and no error message")
        elif status is FlowStatus.ERROR:
            if not self.error_message or self.address is not None:
                raise ValueError("error requires an error message and no address")
        elif status is FlowStatus.ACQUIRING_ADDRESS:
            if self.coordinates is None or self.address is not None or self.error_message is not None:
                raise ValueError("acquiring_address requires coordinates only")
        elif self.coordinates is not None or self.address is not None or self.error_message is not None:
            raise ValueError(f"{status.value} carries no coordinates, address or error")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status_text(self) -> str:
        return status_text_for(self.status.value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_address(self) -> str:
        return format_address(self.address)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def latitude_text(self) -> str | None:
        return self.coordinates.latitude_text if self.coordinates else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def longitude_text(self) -> str | None:
        return self.coordinates.longitude_text if self.coordinates else None
