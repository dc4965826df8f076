"""Studio configuration with pydantic-settings.

All fields have defaults so the studio runs locally with no environment at all.
Most variables use the ``MOTIA_STUDIO_`` prefix; the handful inherited from the
hosting platform (``GROQ_API_KEY``, ``VERCEL``, ``NODE_ENV``) keep their names.

Usage:
    from motia_studio.config import get_settings

    settings = get_settings()
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Motia Studio settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MOTIA_STUDIO_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # === Logging ===

    service_name: str = Field(
        default="motia-studio",
        description="Service name for structured logging",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )

    # === Hosting environment ===

    vercel: bool = Field(
        default=False,
        alias="VERCEL",
        description="Set by the serverless platform; every invocation may be a fresh process",
    )
    node_env: str = Field(
        default="development",
        alias="NODE_ENV",
        description="Deployment environment name",
    )

    # === Storage ===

    storage_backend: Literal["auto", "file", "memory", "redis"] = Field(
        default="auto",
        description="Storage adapter; 'auto' picks memory on serverless hosts, file otherwise",
    )
    data_dir: str = Field(
        default=".data",
        description="Directory holding the collection snapshot files",
    )
    redis_url: str | None = Field(
        default=None,
        description="Redis connection URL (required for the redis backend)",
        examples=["redis://localhost:6379/0"],
    )
    redis_key_prefix: str = Field(
        default="motia_studio",
        description="Key prefix for collection snapshots stored in Redis",
    )
    reload_interval_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Minimum age of the in-process cache before it is reloaded",
    )
    strict_persistence: bool = Field(
        default=False,
        description="Raise PersistenceError instead of logging adapter failures",
    )

    # === Deployments ===

    deploy_delay_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Simulated provisioning time for a deployment",
    )
    deploy_memory: str = Field(default="512MB", description="Memory assigned to deployments")
    deploy_timeout: int = Field(default=30, ge=1, description="Request timeout of deployments")

    # === Code generation ===

    generation_backend: Literal["auto", "llm", "template"] = Field(
        default="auto",
        description="Code generator; 'auto' uses the LLM when an API key is configured",
    )
    groq_api_key: str = Field(
        default="",
        alias="GROQ_API_KEY",
        description="API key for the chat-completion provider",
    )
    llm_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="OpenAI-compatible API base URL",
    )
    llm_model: str = Field(default="llama-3.1-8b-instant")
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=4000, ge=1)
    llm_timeout_seconds: float = Field(default=60.0, gt=0)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @property
    def is_serverless(self) -> bool:
        """True when each invocation may run in a fresh, isolated process."""
        return self.vercel or self.node_env.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
