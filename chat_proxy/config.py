"""Application settings loaded from environment variables."""

from typing import Literal

from pydantic import Field, HttpUrl, SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chat_proxy.exceptions import ConfigurationError
from chat_proxy.prompts import PROMPT_TEMPLATE

DEFAULT_PORT = 5000


class Settings(BaseSettings):
    """Strongly typed, immutable application configuration."""

    hf_api_key: SecretStr = Field(alias="HF_API_KEY")
    hf_model_url: HttpUrl = Field(
        default="https://api-inference.huggingface.co/models/google/gemma-2-9b-it",
        alias="HF_MODEL_URL",
    )
    hf_timeout: float = Field(default=30.0, alias="HF_TIMEOUT", description="Seconds")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int | None = Field(default=None, alias="PORT")
    cors_origin: str = Field(default="http://localhost:3000", alias="CORS_ORIGIN")
    rate_limit_window_seconds: int = Field(
        default=15 * 60, gt=0, alias="RATE_LIMIT_WINDOW_SECONDS"
    )
    rate_limit_max_requests: int = Field(default=100, gt=0, alias="RATE_LIMIT_MAX_REQUESTS")
    rate_limit_trust_proxy: bool = Field(default=False, alias="RATE_LIMIT_TRUST_PROXY")
    strip_prompt_echo: bool = Field(default=True, alias="STRIP_PROMPT_ECHO")
    prompt_template: str = Field(default=PROMPT_TEMPLATE, alias="PROMPT_TEMPLATE")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("hf_api_key")
    @classmethod
    def _require_api_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("HF_API_KEY must not be empty")
        return value

    @field_validator("prompt_template")
    @classmethod
    def _require_placeholder(cls, value: str) -> str:
        if "{message}" not in value:
            raise ValueError("PROMPT_TEMPLATE must contain a {message} placeholder")
        return value

    @model_validator(mode="after")
    def _require_port_in_production(self) -> "Settings":
        if self.environment.lower() == "production" and self.port is None:
            raise ValueError("PORT is required when ENVIRONMENT is production")
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def listen_port(self) -> int:
        return self.port if self.port is not None else DEFAULT_PORT


def load_settings(env_file: str | None = ".env") -> Settings:
    """Build settings once at startup, failing fast on invalid configuration."""

    try:
        return Settings(_env_file=env_file)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc
