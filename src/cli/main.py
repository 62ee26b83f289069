"""CLI principal (Typer).

Comandos:
- `locate`: ejecuta el flujo ubicación -> dirección y ofrece reintentar.
- `doctor`: diagnóstico de configuración y conectividad.

La CLI es solo presentación: construye el `FlowController`, pinta sus
snapshots y reenvía la acción de reintento a `start()`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_state_json, render_state_json
from adapters.location_sources import FixedPermissionPrompter, build_location_provider
from adapters.nominatim import NominatimGeocodingClient
from cli import doctor
from cli.prompts import ConsolePermissionPrompter
from cli.ui_components import build_state_panel, build_status_line, print_banner
from core.config import AppSettings
from core.domain.messages import RETRY_PROMPT
from core.domain.models import FlowState, FlowStatus
from core.interfaces.location import PermissionPrompter
from core.log import configure_logging
from core.services.flow_controller import FlowController, FlowHooks

app = typer.Typer(no_args_is_help=True, help="Current position and estimated address.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def build_controller(
    settings: AppSettings,
    *,
    prompter: PermissionPrompter | None,
    hooks: FlowHooks | None = None,
) -> FlowController:
    return FlowController(
        location=build_location_provider(settings, prompter=prompter),
        geocoder=NominatimGeocodingClient(settings),
        options=settings.location_options(),
        hooks=hooks,
    )


def _print_progress(state: FlowState) -> None:
    if state.status in (FlowStatus.SUCCESS, FlowStatus.ERROR):
        return
    line = build_status_line(state)
    if line is not None:
        _console.print(line)


@app.command()
def locate(
    once: bool = typer.Option(False, "--once", help="Do not offer a retry after the first attempt."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Grant location permission without prompting."),
    as_json: bool = typer.Option(False, "--json", help="Print the final state as JSON (implies --once)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the final state to a JSON file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Acquire the current position and estimate its address."""

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    prompter: PermissionPrompter = FixedPermissionPrompter(True) if yes else ConsolePermissionPrompter()
    hooks = FlowHooks(state_changed=None if as_json else _print_progress)
    controller = build_controller(settings, prompter=prompter, hooks=hooks)

    if not as_json:
        print_banner(_console)

    while True:
        state = asyncio.run(controller.run())

        if as_json:
            typer.echo(render_state_json(state), nl=False)
        else:
            _console.print(build_state_panel(state))
        if output is not None:
            export_state_json(state=state, output_path=output)

        if once or as_json:
            break
        if not typer.confirm(RETRY_PROMPT, default=False, err=True):
            break

    raise typer.Exit(code=0 if state.status is FlowStatus.SUCCESS else 1)


def run() -> None:
    app()
