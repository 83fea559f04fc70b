from pathlib import Path

import yaml
from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_base_url: str = "https://minor-project-api.onrender.com"
    health_path: str = "/health"
    predict_path: str = "/predict"
    health_interval_seconds: float = 30.0
    health_timeout_seconds: float = 10.0
    predict_timeout_seconds: float = 60.0
    service_config_path: str = ""
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_prefix": "NETPULSE_"}

    @model_validator(mode="after")
    def check_health_timeout(self):
        # a check must finish before the next tick is due
        if self.health_timeout_seconds >= self.health_interval_seconds:
            raise ValueError("health_timeout_seconds must be less than health_interval_seconds")
        return self


settings = Settings()


def load_service_config(cfg: Settings | None = None) -> dict:
    """Resolve the prediction service endpoints, applying the optional YAML override."""
    cfg = cfg or settings
    service = {
        "url": cfg.api_base_url,
        "health": cfg.health_path,
        "predict": cfg.predict_path,
    }
    if not cfg.service_config_path:
        return service
    config_path = Path(cfg.service_config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Service config not found: {config_path}")
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}
    overrides = raw.get("service") or {}
    for key in ("url", "health", "predict"):
        if overrides.get(key):
            service[key] = str(overrides[key])
    return service


def get_endpoint_url(service: dict, name: str) -> str:
    """Join the service base URL with the path of a named endpoint."""
    path = service.get(name)
    if not path:
        raise KeyError(f"Endpoint not found in service config: {name}")
    return f"{service['url'].rstrip('/')}/{path.lstrip('/')}"


def predict_timeout(cfg: Settings | None = None) -> float | None:
    """Prediction timeout in seconds, or None when disabled."""
    cfg = cfg or settings
    if cfg.predict_timeout_seconds <= 0:
        return None
    return cfg.predict_timeout_seconds
