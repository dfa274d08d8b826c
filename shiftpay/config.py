import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .timeutils import resolve_timezone

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_ZONE = timezone.utc


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Shift Payroll Reconciliation API"
    database_url: str = Field(
        default="sqlite:///./shiftpay.db",
        description="Database holding schedules and attendance",
    )
    cors_origins: str = Field(default="", description="Comma separated list of allowed origins")
    log_level: str = "INFO"
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")
    otlp_endpoint: str | None = Field(default=None, description="OTLP endpoint for traces/metrics")
    timezone: str = Field(default="UTC", description="Zone used to date attendance check-ins")
    match_unlinked_by_date: bool = Field(
        default=False,
        description="Match attendance logs without a shift id to a shift on the same local date",
    )
    long_shift_hours: float = Field(default=12.0, gt=0)

    model_config = SettingsConfigDict(env_prefix="SHIFTPAY_", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def normalise_level(cls, value: str) -> str:
        return value.upper()

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("SHIFTPAY_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None


@dataclass(frozen=True)
class EngineOptions:
    """Behaviour knobs for a single reconciliation run."""

    timezone: tzinfo = DEFAULT_ZONE
    match_unlinked_by_date: bool = False
    long_shift_hours: float = 12.0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "EngineOptions":
        settings = settings or get_settings()
        return cls(
            timezone=resolve_timezone(settings.timezone),
            match_unlinked_by_date=settings.match_unlinked_by_date,
            long_shift_hours=settings.long_shift_hours,
        )
