"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_LOG_LEVELS = {
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "WARN": "WARNING",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
}


class Settings(BaseSettings):
    OPENOBSERVE_URL: str = Field(..., min_length=1)
    OPENOBSERVE_ORG: str = Field(default="default", min_length=1)
    # Interpolated unquoted into search SQL, so restricted to a plain identifier
    OPENOBSERVE_STREAM: str = Field(default="default", pattern=r"^[A-Za-z0-9_]+$")
    OPENOBSERVE_USER: str = Field(..., min_length=1)
    OPENOBSERVE_PASSWORD: str = Field(..., min_length=1)

    SERVER_PORT: int = Field(default=9098, ge=1, le=65535)
    LOG_LEVEL: str = Field(default="INFO")

    REQUEST_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    # Startup health check: fixed attempt count and sleep interval before giving up
    HEALTH_CHECK_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    HEALTH_CHECK_ATTEMPTS: int = Field(default=30, ge=1)
    HEALTH_CHECK_INTERVAL_SECONDS: float = Field(default=10.0, ge=0)

    ALERT_DESTINATION: str = Field(default="openchoreo_alerts", min_length=1)
    METRICS_ENABLED: bool = Field(default=True)

    class Config:
        env_file = ".env"
        case_sensitive = False

    @field_validator("OPENOBSERVE_ORG", "OPENOBSERVE_STREAM", "ALERT_DESTINATION", mode="before")
    @classmethod
    def _empty_means_default(cls, value, info):
        # An empty variable is treated as unset
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        # Unknown levels fall back to INFO rather than failing startup
        return _LOG_LEVELS.get(str(value or "").strip().upper(), "INFO")

    def masked_password(self) -> str:
        return self.OPENOBSERVE_PASSWORD[0] + "*****"


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment once per process.

    Raises pydantic.ValidationError when a required value is missing.
    """
    return Settings()
