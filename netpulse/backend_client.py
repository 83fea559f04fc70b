import logging

import httpx

logger = logging.getLogger(__name__)

# Timeout presets per call type (seconds); None disables the timeout
TIMEOUTS: dict[str, float | None] = {
    "health": 10.0,
    "predict": 60.0,
    "default": 30.0,
}


class BackendClient:
    """Async HTTP client shared by the health probe and the prediction requests."""

    def __init__(
        self,
        *,
        timeouts: dict[str, float | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client: httpx.AsyncClient | None = None
        self._timeouts = {**TIMEOUTS, **(timeouts or {})}
        self._transport = transport

    async def start(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            follow_redirects=True,
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=4),
            transport=self._transport,
        )

    async def stop(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def started(self) -> bool:
        return self._client is not None

    def _require_client(self) -> httpx.AsyncClient:
        """Return initialized client or raise a clear runtime error."""
        if self._client is None:
            raise RuntimeError("Backend client is not started")
        return self._client

    def timeout_for(self, timeout_type: str) -> float | None:
        return self._timeouts.get(timeout_type, self._timeouts["default"])

    async def request(
        self,
        method: str,
        url: str,
        *,
        timeout_type: str = "default",
        **kwargs,
    ) -> httpx.Response:
        """Send a single request. No retries: callers decide what a failure means."""
        timeout = self.timeout_for(timeout_type)
        return await self._require_client().request(
            method, url, timeout=timeout, **kwargs
        )

    async def health_check(self, url: str) -> dict:
        """Check the service health endpoint. Returns status dict."""
        try:
            resp = await self._require_client().get(url, timeout=self.timeout_for("health"))
            return {
                "status": "healthy" if resp.is_success else "unhealthy",
                "code": resp.status_code,
            }
        except Exception as e:
            return {"status": "unhealthy", "error": str(e) or type(e).__name__}

