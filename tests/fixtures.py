"""Shared fakes for driving the client core against httpx.MockTransport."""

import asyncio
import json
from types import SimpleNamespace

import httpx

from netpulse.backend_client import BackendClient
from netpulse.models import HealthStatus

BASE_URL = "http://prediction.test"
HEALTH_URL = f"{BASE_URL}/health"
PREDICT_URL = f"{BASE_URL}/predict"


class RecordingHandler:
    """MockTransport handler that records requests and optionally holds responses."""

    def __init__(self, responder):
        self.responder = responder
        self.requests: list[httpx.Request] = []
        self.entered: asyncio.Event | None = None
        self.release: asyncio.Event | None = None

    def hold(self) -> None:
        """Block responses until ``release`` is set. Call inside the running loop."""
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.release is not None:
            self.entered.set()
            await self.release.wait()
        result = self.responder(request)
        if isinstance(result, Exception):
            raise result
        return result

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def json_body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


def make_client(handler) -> BackendClient:
    return BackendClient(transport=httpx.MockTransport(handler))


def fake_probe(status: HealthStatus = HealthStatus.HEALTHY) -> SimpleNamespace:
    return SimpleNamespace(status=status)


def predicts(issue_type: str):
    return lambda request: httpx.Response(200, json={"predicted_issue_type": issue_type})
