"""Single-flight prediction request lifecycle."""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import ValidationError

from .backend_client import BackendClient
from .form_model import FormModel
from .health_probe import HealthProbe
from .http_utils import failure_message, json_object, status_error_message, validation_message
from .models import (
    Failed,
    HealthStatus,
    Idle,
    NetworkSample,
    Pending,
    PredictionOutcome,
    PredictionResult,
    Succeeded,
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class RequestController:
    """Drives Idle -> Pending -> Succeeded | Failed for one prediction at a time.

    Submissions are gated on the probe's last status and on there being no
    request already pending; a gated submission is a no-op, not an error.
    """

    def __init__(
        self,
        client: BackendClient,
        predict_url: str,
        form: FormModel,
        probe: HealthProbe,
    ):
        self._client = client
        self._predict_url = predict_url
        self._form = form
        self._probe = probe
        self._outcome: PredictionOutcome = Idle()
        self._disposed = False
        self._task: asyncio.Task | None = None

    @property
    def outcome(self) -> PredictionOutcome:
        return self._outcome

    @property
    def pending(self) -> bool:
        return isinstance(self._outcome, Pending)

    @property
    def can_submit(self) -> bool:
        return (
            not self._disposed
            and not self.pending
            and self._probe.status != HealthStatus.UNHEALTHY
        )

    async def submit(self) -> bool:
        """Run one prediction end to end. Returns False when the submission was gated."""
        sample = self._begin()
        if sample is None:
            return False
        await self._send(sample)
        return True

    def trigger(self) -> bool:
        """Start a prediction in the background. Returns False when gated."""
        sample = self._begin()
        if sample is None:
            return False
        self._task = asyncio.create_task(self._send(sample))
        return True

    async def join(self) -> None:
        """Wait for a background prediction started by ``trigger()`` to settle."""
        if self._task is not None:
            await asyncio.shield(self._task)

    def reset(self) -> None:
        if self.pending or self._disposed:
            return
        self._outcome = Idle()

    async def dispose(self) -> None:
        self._disposed = True
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _begin(self) -> NetworkSample | None:
        if not self.can_submit:
            logger.info(
                "Prediction submission ignored (status=%s, outcome=%s)",
                self._probe.status.value,
                self._outcome.kind,
            )
            return None
        # Pending replaces any earlier result or error before the request goes out
        self._outcome = Pending()
        return self._form.sample

    async def _send(self, sample: NetworkSample) -> None:
        logger.info("Submitting prediction request to %s", self._predict_url)
        try:
            resp = await self._client.request(
                "POST",
                self._predict_url,
                timeout_type="predict",
                content=sample.model_dump_json(),
                headers=JSON_HEADERS,
            )
            if not resp.is_success:
                outcome: PredictionOutcome = Failed(status_error_message(resp))
            else:
                result = PredictionResult.model_validate(json_object(resp))
                outcome = Succeeded(result.predicted_issue_type)
        except ValidationError as e:
            logger.warning("Invalid prediction response: %s", e)
            outcome = Failed(validation_message(e))
        except (httpx.HTTPError, ValueError) as e:
            outcome = Failed(failure_message(e))
        except Exception as e:
            # Pending must always settle
            logger.exception("Prediction request failed: %s", e)
            outcome = Failed(failure_message(e))
        self._settle(outcome)

    def _settle(self, outcome: PredictionOutcome) -> None:
        if self._disposed:
            logger.debug("Ignoring prediction outcome after teardown: %s", outcome)
            return
        self._outcome = outcome
        if isinstance(outcome, Succeeded):
            logger.info("Prediction succeeded: %s", outcome.issue_type)
        else:
            logger.warning("Prediction failed: %s", outcome.message)
