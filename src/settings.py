from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FARE_TABLE_PATH = Path(__file__).parent / "fares" / "data" / "transportFare.json"


def _validate_base_url(v: str, service: str) -> str:
    if not v.startswith(("http://", "https://")):
        raise ValueError(f"{service} base URL must start with http:// or https://")
    return v.rstrip("/")


class AppSettings(BaseSettings):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="APP_")


class OneMapSettings(BaseSettings):
    """OneMap geocoding and routing provider configuration.

    The token may be empty here; the routing client refuses to start
    without one, while geocoding works unauthenticated.
    """

    base_url: str = "https://www.onemap.gov.sg"
    token: str = ""
    timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)

    model_config = SettingsConfigDict(env_prefix="ONEMAP_")

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _validate_base_url(v, "OneMap")

    @field_validator("token")
    @classmethod
    def strip_token(cls, v: str) -> str:
        return v.strip()


class LTASettings(BaseSettings):
    """LTA DataMall configuration for taxi availability."""

    base_url: str = "https://datamall2.mytransport.sg"
    account_key: str = ""
    timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)

    model_config = SettingsConfigDict(env_prefix="LTA_")

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _validate_base_url(v, "LTA DataMall")


class FareSettings(BaseSettings):
    table_path: Path = DEFAULT_FARE_TABLE_PATH

    model_config = SettingsConfigDict(env_prefix="FARE_")


class CORSSettings(BaseSettings):
    origins: str = "http://localhost:8081,http://localhost:19006"

    model_config = SettingsConfigDict(env_prefix="CORS_")


class RateLimitSettings(BaseSettings):
    fare_route: str = "60/minute"
    taxi: str = "120/minute"

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_")


class ServerSettings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = Field(default=5001, ge=1, le=65535)

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class Settings(BaseSettings):
    app: AppSettings = Field(default_factory=AppSettings)
    onemap: OneMapSettings = Field(default_factory=OneMapSettings)
    lta: LTASettings = Field(default_factory=LTASettings)
    fare: FareSettings = Field(default_factory=FareSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
