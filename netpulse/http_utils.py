"""HTTP helpers for turning service responses into user-facing outcomes."""

import httpx
from pydantic import ValidationError

FALLBACK_ERROR_MESSAGE = "An error occurred while making the prediction"


def status_error_message(resp: httpx.Response) -> str:
    """Message shown for a non-2xx prediction response."""
    return f"HTTP error! status: {resp.status_code}"


def failure_message(exc: BaseException) -> str:
    """Return the exception's own message, or a stable fallback when it has none."""
    message = str(exc).strip()
    return message or FALLBACK_ERROR_MESSAGE


def json_object(resp: httpx.Response) -> dict:
    """Decode a JSON object body. Raises ValueError for anything else."""
    payload = resp.json()
    if not isinstance(payload, dict):
        raise ValueError("Prediction response is not a JSON object")
    return payload


def validation_message(exc: ValidationError) -> str:
    """Describe why a 2xx body failed validation, e.g. a wrong-typed issue field."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in exc.errors()
    )
    return f"Invalid prediction response: {problems}"
