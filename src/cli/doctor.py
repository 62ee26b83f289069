"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.location_sources import build_location_provider
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import LocationError, LocationErrorKind
from core.domain.models import Coordinates

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_provider(settings: AppSettings) -> tuple[bool, str]:
    """Check whether the selected provider exists, without acquiring a fix.

    Unsupported is raised synchronously, so the returned coroutine is
    closed before it ever runs (no permission prompt, no network).
    """

    provider = build_location_provider(settings)
    try:
        pending = provider.request_current_location(settings.location_options())
    except LocationError as exc:
        if exc.kind is LocationErrorKind.UNSUPPORTED:
            return False, exc.detail or "unsupported"
        return False, str(exc)
    close = getattr(pending, "close", None)
    if callable(close):
        close()
    return True, type(provider).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="genzaichi Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Geocoding URL", "OK", settings.reverse_geocode_url)
    table.add_row("Location provider", "OK", settings.location_provider)
    table.add_row("Location timeout", "OK", f"{settings.location_timeout_ms} ms")

    ok_provider, detail_provider = _check_provider(settings)
    table.add_row("Location capability", "OK" if ok_provider else "FAIL", detail_provider)

    # Connectivity (best-effort)
    ok_geo, detail_geo = asyncio.run(_check_http(settings.reverse_geocode_url, settings))
    table.add_row("Geocoding connectivity", "OK" if ok_geo else "FAIL", detail_geo)

    if settings.location_provider == "ip" and settings.ip_location_url.strip():
        ok_ip, detail_ip = asyncio.run(_check_http(settings.ip_location_url, settings))
        table.add_row("IP lookup connectivity", "OK" if ok_ip else "FAIL", detail_ip)

    _console.print(table)

    if not ok_provider:
        _console.print(
            "\n[yellow]Note:[/yellow] Run `genzaichi doctor setup-location` to store a fixed location."
        )


@app.command(name="setup-location")
def setup_location() -> None:
    """Interactive static-location setup (stores config in the user config .env)."""

    latitude = typer.prompt("Latitude", type=float)
    longitude = typer.prompt("Longitude", type=float)

    try:
        coordinates = Coordinates(latitude=latitude, longitude=longitude)
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid coordinates: {exc.errors()[0]['msg']}") from exc

    env_path = write_user_env_vars(
        {
            "GENZAICHI_LOCATION_PROVIDER": "static",
            "GENZAICHI_STATIC_LATITUDE": repr(coordinates.latitude),
            "GENZAICHI_STATIC_LONGITUDE": repr(coordinates.longitude),
        }
    )

    _console.print(f"[green]Saved location config to:[/green] {env_path}")
