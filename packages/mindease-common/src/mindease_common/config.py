"""
Environment-based configuration management for MindEase.

Uses pydantic-settings to load configuration values from environment
variables and .env files. All services import their settings from this
module to ensure consistent configuration handling.

All environment variables are prefixed with ``ME_`` to avoid collisions.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from ``ME_``-prefixed environment variables.

    Attributes:
        assemblyai_api_key: API key for the AssemblyAI transcription API.
        assemblyai_base_url: AssemblyAI REST base URL.
        transcription_backend: Backend used by the workflow controller.
        proxy_url: Base URL of the transcription proxy service.
        poll_interval_s: Seconds between transcription status polls.
        poll_backoff_factor: Multiplier applied to the interval after each poll.
        max_poll_interval_s: Upper bound for the poll interval.
        max_poll_attempts: Polls allowed per job before it is failed.
        http_timeout_s: Timeout for outbound HTTP calls.
        storage_backend: Key-value store implementation (``memory``/``redis``).
        redis_url: Redis connection URL for the key-value store.
        proxy_host: Bind address for the transcription proxy.
        proxy_port: Bind port for the transcription proxy.
        companion_host: Bind address for the companion service.
        companion_port: Bind port for the companion service.
        cors_origins: Origins allowed by the CORS middleware.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render logs as JSON instead of console output.
    """

    model_config = SettingsConfigDict(
        env_prefix="ME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Transcription ──
    assemblyai_api_key: str = Field(default="", description="AssemblyAI API key.")
    assemblyai_base_url: str = Field(
        default="https://api.assemblyai.com",
        description="AssemblyAI REST base URL.",
    )
    transcription_backend: str = Field(
        default="proxy",
        description="Transcription backend identifier.",
    )
    proxy_url: str = Field(
        default="http://localhost:3001",
        description="Base URL of the transcription proxy service.",
    )

    # ── Polling ──
    poll_interval_s: float = Field(
        default=3.0,
        gt=0.0,
        description="Seconds between transcription status polls.",
    )
    poll_backoff_factor: float = Field(
        default=1.0,
        ge=1.0,
        description="Multiplier applied to the poll interval after each poll.",
    )
    max_poll_interval_s: float = Field(
        default=30.0,
        gt=0.0,
        description="Upper bound for the poll interval.",
    )
    max_poll_attempts: int = Field(
        default=200,
        ge=1,
        description="Polls allowed per job before it is failed.",
    )
    http_timeout_s: float = Field(
        default=30.0,
        gt=0.0,
        description="Timeout for outbound HTTP calls.",
    )

    # ── Storage ──
    storage_backend: str = Field(
        default="memory",
        description="Key-value store implementation (memory or redis).",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL.",
    )

    # ── HTTP services ──
    proxy_host: str = Field(default="0.0.0.0", description="Proxy bind address.")
    proxy_port: int = Field(default=3001, ge=1, le=65535, description="Proxy bind port.")
    companion_host: str = Field(default="0.0.0.0", description="Companion bind address.")
    companion_port: int = Field(
        default=8010,
        ge=1,
        le=65535,
        description="Companion bind port.",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware.",
    )

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Logging level.")
    log_json: bool = Field(default=True, description="Render logs as JSON.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()
