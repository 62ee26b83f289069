"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/ubicación) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import LocationRequestOptions

_APP_DIR_NAME = "genzaichi"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / _APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / _APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / _APP_DIR_NAME
    return Path.home() / ".config" / _APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# genzaichi user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="GENZAICHI_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout explícito por request HTTP (segundos).",
    )
    user_agent: str = Field(
        default="genzaichi/0.1 (+https://local)",
        min_length=1,
        description="User-Agent (Nominatim exige uno identificable).",
    )

    reverse_geocode_url: str = Field(
        default="https://nominatim.openstreetmap.org/reverse",
        min_length=8,
        description="Endpoint de reverse geocoding (API compatible Nominatim).",
    )

    location_provider: Literal["ip", "static"] = Field(
        default="ip",
        description="Fuente de ubicación: lookup por IP o ubicación configurada.",
    )
    ip_location_url: str = Field(
        default="https://ipapi.co/json/",
        description="Endpoint JSON de geolocalización por IP (vacío = no soportado).",
    )
    static_latitude: float | None = Field(
        default=None,
        ge=-90.0,
        le=90.0,
        description="Latitud fija para el proveedor `static`.",
    )
    static_longitude: float | None = Field(
        default=None,
        ge=-180.0,
        le=180.0,
        description="Longitud fija para el proveedor `static`.",
    )

    location_timeout_ms: int = Field(
        default=10_000,
        gt=0,
        description="Timeout del proveedor de ubicación (milisegundos).",
    )
    high_accuracy: bool = Field(
        default=True,
        description="Pedir la mejor precisión disponible.",
    )
    force_fresh: bool = Field(
        default=True,
        description="No aceptar posiciones cacheadas.",
    )

    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging (DEBUG, INFO, WARNING, ...).",
    )

    def location_options(self) -> LocationRequestOptions:
        return LocationRequestOptions(
            high_accuracy=self.high_accuracy,
            timeout_ms=self.location_timeout_ms,
            force_fresh=self.force_fresh,
        )
