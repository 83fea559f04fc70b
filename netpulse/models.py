from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Union

from pydantic import BaseModel, Field, field_serializer


def _now_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


# --- Request / response models ---


class NetworkSample(BaseModel):
    timestamp: str = Field(default_factory=_now_timestamp)
    source_ip: str = "192.168.1.1"
    dest_ip: str = "8.8.8.8"
    protocol: str = "TCP"
    packet_size: float = 512
    latency_ms: float = 90.0
    error_rate: float = 0.2
    device_type: str = "router"

    model_config = {"frozen": True}

    @field_serializer("packet_size", "latency_ms", "error_rate")
    def serialize_number(self, value: float):
        # 512.0 goes out as 512, the way a browser serializes it
        if float(value).is_integer():
            return int(value)
        return value


class PredictionResult(BaseModel):
    predicted_issue_type: str = Field(..., strict=True)


PROTOCOL_OPTIONS = ["TCP", "UDP", "ICMP"]
DEVICE_TYPE_OPTIONS = ["router", "switch", "firewall"]
NUMERIC_FIELDS = frozenset({"packet_size", "latency_ms", "error_rate"})
SAMPLE_FIELDS = tuple(NetworkSample.model_fields)


# --- Health ---


class HealthStatus(str, Enum):
    UNKNOWN = "unknown"
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


# --- Prediction outcome ---


@dataclass(frozen=True)
class Idle:
    kind: ClassVar[str] = "idle"

    def to_dict(self) -> dict:
        return {"kind": self.kind}


@dataclass(frozen=True)
class Pending:
    kind: ClassVar[str] = "pending"

    def to_dict(self) -> dict:
        return {"kind": self.kind}


@dataclass(frozen=True)
class Succeeded:
    issue_type: str
    kind: ClassVar[str] = "succeeded"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "issue_type": self.issue_type}


@dataclass(frozen=True)
class Failed:
    message: str
    kind: ClassVar[str] = "failed"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


PredictionOutcome = Union[Idle, Pending, Succeeded, Failed]


# --- Display ---


@dataclass(frozen=True)
class IssueClassification:
    label: str
    color_class: str
    icon: str
    description: str


@dataclass(frozen=True)
class HealthBadge:
    text: str
    color_class: str
    pulse: bool


@dataclass(frozen=True)
class SubmitButton:
    label: str
    disabled: bool
