"""Periodic liveness probe for the prediction service."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from .backend_client import BackendClient
from .models import HealthStatus

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0


class HealthProbe:
    """Checks the service health endpoint now and then every ``interval`` seconds.

    Each tick runs its check in its own task, so a slow check never delays the
    ticker. While a check is still in flight, later ticks start nothing, so a
    check slower than the interval still settles the status. A manual
    ``check_now()`` supersedes any older check through a token, and the older
    result is dropped. After ``stop()`` no check writes the status.
    """

    def __init__(
        self,
        client: BackendClient,
        health_url: str,
        *,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        on_change: Callable[[HealthStatus, HealthStatus], None] | None = None,
    ):
        self._client = client
        self._health_url = health_url
        self._interval = interval
        self._on_change = on_change
        self._status = HealthStatus.UNKNOWN
        self._token = 0
        self._disposed = False
        self._ticker: asyncio.Task | None = None
        self._inflight: asyncio.Task | None = None
        self.last_result: dict | None = None

    @property
    def status(self) -> HealthStatus:
        return self._status

    @property
    def running(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    def start(self) -> None:
        if self._ticker is not None or self._disposed:
            return
        self._ticker = asyncio.create_task(self._run_loop())

    async def stop(self) -> None:
        self._disposed = True
        for task in (self._ticker, self._inflight):
            if task is None or task.done():
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._ticker = None
        self._inflight = None

    async def check_now(self) -> HealthStatus:
        """Run one liveness check and apply its result unless superseded or disposed."""
        self._token += 1
        token = self._token
        result = await self._client.health_check(self._health_url)
        if self._disposed:
            logger.debug("Ignoring health result after teardown: %s", result)
            return self._status
        if token != self._token:
            logger.debug("Ignoring superseded health result: %s", result)
            return self._status
        self.last_result = result
        self._apply(HealthStatus(result["status"]))
        return self._status

    async def _run_loop(self) -> None:
        while not self._disposed:
            if self._inflight is None or self._inflight.done():
                self._inflight = asyncio.create_task(self.check_now())
            else:
                logger.debug("Health check still in flight, skipping tick")
            await asyncio.sleep(self._interval)

    def _apply(self, new_status: HealthStatus) -> None:
        old_status = self._status
        self._status = new_status
        if old_status == new_status:
            return
        if new_status == HealthStatus.HEALTHY:
            logger.info("Prediction service is healthy (%s)", self._health_url)
        else:
            result = self.last_result or {}
            logger.warning(
                "Prediction service is unhealthy (%s): %s",
                self._health_url,
                result.get("error") or result.get("code"),
            )
        if self._on_change is not None:
            self._on_change(old_status, new_status)
