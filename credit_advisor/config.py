"""Application configuration via pydantic-settings.

Values are loaded from environment variables (.env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InferenceEngineSettings(BaseSettings):
    """Connection settings for the remote inference engine API."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    inference_engine_base_url: str = Field(
        default="http://localhost:3000/api/v1",
        description="Base URL of the back-office API exposing /inference-engine",
    )
    inference_engine_token: str = Field(
        default="",
        description="Bearer token sent as Authorization header (empty = no header)",
    )
    inference_engine_timeout: float = Field(default=30.0, description="Request timeout in seconds")
    inference_engine_connect_timeout: float = Field(default=5.0, description="Connect timeout in seconds")


class PolicySettings(BaseSettings):
    """Business constants shared by the recommender, validator and formatters."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    legal_minimum_wage: int = Field(
        default=1_300_000,
        description="SMMLV (salario mínimo mensual legal vigente) in COP",
    )
    currency_symbol: str = Field(default="$")


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.engine.inference_engine_base_url
        settings.policy.legal_minimum_wage
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    engine: InferenceEngineSettings = Field(default_factory=InferenceEngineSettings)
    policy: PolicySettings = Field(default_factory=PolicySettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Module-level singleton. Import this wherever settings are needed.
settings = Settings()
