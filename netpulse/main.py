"""NetPulse console: operator page and JSON API around the prediction client core."""

import logging
from contextlib import asynccontextmanager
from typing import Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from .backend_client import BackendClient
from .config import get_endpoint_url, load_service_config, predict_timeout, settings
from .form_model import FormModel
from .health_probe import HealthProbe
from .page import build_state, render_page
from .request_controller import RequestController

logger = logging.getLogger(__name__)

client = BackendClient(
    timeouts={
        "health": settings.health_timeout_seconds,
        "predict": predict_timeout(settings),
    }
)

# Shared state populated at startup
_service_config: dict = {}
_form: FormModel | None = None
_probe: HealthProbe | None = None
_controller: RequestController | None = None


def get_form() -> FormModel:
    if _form is None:
        raise RuntimeError("Form model is not initialized")
    return _form


def get_probe() -> HealthProbe:
    if _probe is None:
        raise RuntimeError("Health probe is not initialized")
    return _probe


def get_controller() -> RequestController:
    if _controller is None:
        raise RuntimeError("Request controller is not initialized")
    return _controller


def current_state() -> dict:
    return build_state(get_form(), get_probe(), get_controller())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup mounts the client core; shutdown tears it down."""
    global _service_config, _form, _probe, _controller

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    _service_config = load_service_config(settings)
    logger.info("Prediction service at %s", _service_config["url"])

    await client.start()
    _form = FormModel()
    _probe = HealthProbe(
        client,
        get_endpoint_url(_service_config, "health"),
        interval=settings.health_interval_seconds,
    )
    _controller = RequestController(
        client,
        get_endpoint_url(_service_config, "predict"),
        _form,
        _probe,
    )
    _probe.start()
    logger.info("NetPulse console started")

    yield

    await _controller.dispose()
    await _probe.stop()
    await client.stop()
    _controller = None
    _probe = None
    _form = None
    logger.info("NetPulse console stopped")


app = FastAPI(title="NetPulse Console", version="1.0.0", lifespan=lifespan)


# --- Error handling ---


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# --- Health endpoint ---


@app.get("/health")
async def health():
    """Console liveness plus the last known prediction service status."""
    probe = get_probe()
    return {
        "status": "ok",
        "prediction_service": probe.status.value,
        "last_check": probe.last_result,
    }


# --- Prediction panel API ---


class FieldUpdate(BaseModel):
    field: str
    value: Union[str, float, int, None] = None


@app.get("/api/state")
async def state():
    return current_state()


@app.post("/api/form")
async def update_form(update: FieldUpdate):
    """Apply one field edit and return the normalized sample."""
    try:
        sample = get_form().update(update.field, update.value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return sample.model_dump(mode="json")


@app.post("/api/predict")
async def predict():
    """Start a prediction. A gated attempt is reported, not raised."""
    accepted = get_controller().trigger()
    return {"accepted": accepted, **current_state()}


@app.post("/api/reset")
async def reset():
    get_controller().reset()
    return current_state()


# --- Page ---


async def _serve_page() -> HTMLResponse:
    return HTMLResponse(content=render_page(current_state()))


@app.get("/", include_in_schema=False, response_class=HTMLResponse)
async def root_page():
    return await _serve_page()


@app.get("/ui", include_in_schema=False, response_class=HTMLResponse)
async def ui_page():
    """Serve the console page on /ui alias."""
    return await _serve_page()
