"""Fuente de ubicación determinista para tests.

Devuelve coordenadas o errores predefinidos, en orden, uno por petición (el
último se repite). Puede retrasar o retener la completion (`release`) para
simular peticiones en vuelo.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Sequence, Union

from adapters.location_sources.permission import PermissionGate
from core.domain.errors import LocationError, LocationErrorKind
from core.domain.models import Coordinates, LocationRequestOptions
from core.interfaces.location import LocationProvider, PermissionPrompter

FakeResult = Union[Coordinates, LocationError]


class FakeLocationProvider(LocationProvider):
    def __init__(
        self,
        results: FakeResult | Sequence[FakeResult],
        *,
        supported: bool = True,
        delay: float = 0.0,
        release: asyncio.Event | None = None,
        prompter: PermissionPrompter | None = None,
    ) -> None:
        if isinstance(results, (Coordinates, LocationError)):
            results = [results]
        if not results:
            raise ValueError("FakeLocationProvider needs at least one result")
        self._results = list(results)
        self._supported = supported
        self._delay = delay
        self._release = release
        self.permission = PermissionGate(prompter)
        self.calls: list[LocationRequestOptions] = []

    def request_current_location(
        self, options: LocationRequestOptions
    ) -> Awaitable[Coordinates]:
        self.calls.append(options)
        if not self._supported:
            raise LocationError(LocationErrorKind.UNSUPPORTED)
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        granted = self.permission.resolve()
        return self._resolve(result, options, granted)

    async def _resolve(
        self, result: FakeResult, options: LocationRequestOptions, granted: bool
    ) -> Coordinates:
        if not granted:
            raise LocationError(LocationErrorKind.PERMISSION_DENIED)
        try:
            return await asyncio.wait_for(self._produce(result), timeout=options.timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise LocationError(LocationErrorKind.TIMEOUT) from exc

    async def _produce(self, result: FakeResult) -> Coordinates:
        if self._release is not None:
            await self._release.wait()
        if self._delay:
            await asyncio.sleep(self._delay)
        if isinstance(result, LocationError):
            raise LocationError(result.kind, result.detail)
        return result
