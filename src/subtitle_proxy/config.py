"""Configuration via environment variables."""

from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Transport(str, Enum):
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


class Settings(BaseSettings):
    model_config = {"env_prefix": "SUBTITLE_PROXY_", "populate_by_name": True}

    transport: Transport = Transport.STREAMABLE_HTTP
    host: str = "0.0.0.0"
    port: int = Field(
        default=3001,
        validation_alias=AliasChoices("SUBTITLE_PROXY_PORT", "PORT"),
    )
    cache_max_size: int = Field(default=1000, ge=1)
    cache_max_age_seconds: float = Field(default=24 * 60 * 60, gt=0)
    cache_sweep_interval_seconds: float = Field(default=60 * 60, gt=0)
    static_dir: str | None = None
    log_level: str = "INFO"
