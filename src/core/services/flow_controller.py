"""Orquestación del flujo ubicación -> dirección.

Este módulo contiene la máquina de estados que coordina un `LocationProvider`
y un `GeocodingClient`. La capa de presentación (CLI, tests, futuras APIs)
solo llama a `start()` y lee snapshots inmutables de `FlowState`; todos los
fallos se convierten aquí en un `error_message` y nunca escapan del Core.

Cada `start()` captura una época (contador monótono). Las completions de
iteraciones anteriores que llegan tarde se descartan en lugar de
sobrescribir el estado de la iteración actual.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from core.domain.errors import LocationError, LocationErrorKind, NetworkError, ServiceError
from core.domain.messages import (
    ADDRESS_FETCH_ERROR,
    DISPLAY_LANGUAGE,
    location_error_message,
)
from core.domain.models import (
    Address,
    Coordinates,
    FlowState,
    FlowStatus,
    LocationRequestOptions,
    format_address,
)
from core.interfaces.geocoding import GeocodingClient
from core.interfaces.location import LocationProvider

logger = logging.getLogger(__name__)


@dataclass
class FlowHooks:
    """Optional callbacks for presentation layers."""

    state_changed: Callable[[FlowState], None] | None = None


class FlowController:
    """Dueño exclusivo del `FlowState` de una sesión.

    Transiciones:
    - `start()`: reset completo, status AcquiringLocation, pide ubicación.
    - ubicación OK: guarda coordenadas, status AcquiringAddress, pide dirección.
    - ubicación KO: mensaje según el tipo de fallo, status Error.
    - dirección OK: guarda dirección, status Success.
    - dirección KO: mensaje genérico, status Error, conserva coordenadas.
    """

    def __init__(
        self,
        *,
        location: LocationProvider,
        geocoder: GeocodingClient,
        options: LocationRequestOptions | None = None,
        language_tag: str = DISPLAY_LANGUAGE,
        hooks: FlowHooks | None = None,
    ) -> None:
        self._location = location
        self._geocoder = geocoder
        self._options = options or LocationRequestOptions()
        self._language_tag = language_tag
        self._hooks = hooks or FlowHooks()
        self._state = FlowState()
        self._epoch = 0

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def status(self) -> FlowStatus:
        return self._state.status

    @property
    def coordinates(self) -> Coordinates | None:
        return self._state.coordinates

    @property
    def address(self) -> Address | None:
        return self._state.address

    @property
    def error_message(self) -> str | None:
        return self._state.error_message

    @property
    def formatted_address(self) -> str:
        return format_address(self._state.address)

    @property
    def epoch(self) -> int:
        return self._epoch

    def start(self) -> "asyncio.Future[FlowState]":
        """Arranca (o reinicia) el flujo desde cualquier estado.

        Debe llamarse con un event loop en marcha. Devuelve un future que
        resuelve al snapshot final de esta iteración (o al snapshot vigente si
        la iteración quedó obsoleta).
        """

        loop = asyncio.get_running_loop()
        self._epoch += 1
        epoch = self._epoch
        logger.debug("flow start (epoch=%d)", epoch)
        self._publish(FlowState(status=FlowStatus.ACQUIRING_LOCATION))

        try:
            pending = self._location.request_current_location(self._options)
        except LocationError as exc:
            self._fail_location(epoch, exc)
            return self._resolved(loop)
        except Exception as exc:
            logger.exception("location provider raised unexpectedly")
            self._fail_location(epoch, exc)
            return self._resolved(loop)

        return asyncio.ensure_future(self._complete(epoch, pending))

    async def run(self) -> FlowState:
        """`start()` y espera a que la iteración termine."""

        return await self.start()

    async def _complete(self, epoch: int, pending: Awaitable[Coordinates]) -> FlowState:
        try:
            coordinates = await pending
        except LocationError as exc:
            self._fail_location(epoch, exc)
            return self._state
        except Exception as exc:
            logger.exception("location request failed unexpectedly")
            self._fail_location(epoch, exc)
            return self._state

        if self._is_stale(epoch, "location result"):
            return self._state

        logger.debug(
            "location acquired (epoch=%d): %s, %s",
            epoch,
            coordinates.latitude_text,
            coordinates.longitude_text,
        )
        self._publish(FlowState(status=FlowStatus.ACQUIRING_ADDRESS, coordinates=coordinates))

        try:
            address = await self._geocoder.reverse_geocode(coordinates, self._language_tag)
        except ServiceError as exc:
            logger.warning("reverse geocoding failed: HTTP %s", exc.status_code)
            self._fail_address(epoch, coordinates)
            return self._state
        except NetworkError as exc:
            logger.warning("reverse geocoding failed: %r", exc.cause)
            self._fail_address(epoch, coordinates)
            return self._state
        except Exception:
            logger.exception("reverse geocoding raised unexpectedly")
            self._fail_address(epoch, coordinates)
            return self._state

        if not isinstance(address, Address):
            logger.error("geocoder returned %s instead of an Address", type(address).__name__)
            self._fail_address(epoch, coordinates)
            return self._state

        if self._is_stale(epoch, "address result"):
            return self._state

        self._publish(
            FlowState(status=FlowStatus.SUCCESS, coordinates=coordinates, address=address)
        )
        return self._state

    def _fail_location(self, epoch: int, exc: BaseException) -> None:
        if self._is_stale(epoch, "location failure"):
            return
        kind = exc.kind if isinstance(exc, LocationError) else LocationErrorKind.UNKNOWN
        logger.warning("location request failed: %s", exc)
        self._publish(
            FlowState(status=FlowStatus.ERROR, error_message=location_error_message(kind))
        )

    def _fail_address(self, epoch: int, coordinates: Coordinates) -> None:
        if self._is_stale(epoch, "address failure"):
            return
        self._publish(
            FlowState(
                status=FlowStatus.ERROR,
                coordinates=coordinates,
                error_message=ADDRESS_FETCH_ERROR,
            )
        )

    def _is_stale(self, epoch: int, what: str) -> bool:
        if epoch == self._epoch:
            return False
        logger.debug("discarding stale %s (epoch=%d, current=%d)", what, epoch, self._epoch)
        return True

    def _resolved(self, loop: asyncio.AbstractEventLoop) -> "asyncio.Future[FlowState]":
        future: asyncio.Future[FlowState] = loop.create_future()
        future.set_result(self._state)
        return future

    def _publish(self, state: FlowState) -> None:
        self._state = state
        if self._hooks.state_changed is None:
            return
        try:
            self._hooks.state_changed(state)
        except Exception:
            logger.exception("state observer failed")
