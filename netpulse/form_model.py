"""Editable network sample backing the prediction form."""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from .models import NUMERIC_FIELDS, SAMPLE_FIELDS, NetworkSample

# Leading numeric prefix, as accepted by a browser's parseFloat
_FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(raw: Any) -> float:
    """Parse a form value into a finite number, substituting 0 on failure."""
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _FLOAT_PREFIX_RE.match(str(raw))
        if not match:
            return 0.0
        value = float(match.group(1))
    if not math.isfinite(value) or value == 0:
        return 0.0
    return value


class FormModel:
    """Holds the current NetworkSample and normalizes edits field by field."""

    def __init__(self, sample: NetworkSample | None = None):
        self._sample = sample or NetworkSample()

    @property
    def sample(self) -> NetworkSample:
        return self._sample

    def update(self, field: str, raw_value: Any) -> NetworkSample:
        if field not in SAMPLE_FIELDS:
            raise ValueError(f"Unknown form field: {field}")
        if field in NUMERIC_FIELDS:
            value: Any = parse_number(raw_value)
        else:
            value = "" if raw_value is None else str(raw_value)
        self._sample = self._sample.model_copy(update={field: value})
        return self._sample

    def update_many(self, values: Mapping[str, Any]) -> NetworkSample:
        for field, raw_value in values.items():
            self.update(field, raw_value)
        return self._sample
