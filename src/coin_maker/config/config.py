# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, CHAIN__API_KEY.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder receiving wallet used when MARKETPLACE__PLATFORM_WALLET is not set.
DEFAULT_PLATFORM_WALLET = "UQAmTM_EE8D6seecLKf-h8aXVQasliniDDQ52EvBj7PqExNr"


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Identity of the running service, attached to every log event."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "coin-maker"
    service_name: Optional[str] = Field(
        default=None,
        description="Service name reported to Logfire (defaults to app_name).",
    )
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Log destinations and their levels."""

    model_config = SettingsConfigDict(extra="ignore")

    log_to_console: bool = True
    console_level: LogLevel = "INFO"
    json_format: bool = Field(
        default=False,
        description="Render console output as JSON instead of the colored dev format.",
    )

    log_to_file: bool = False
    file_level: LogLevel = "INFO"
    log_file_path: str = "logs/coin_maker.log"
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = Field(default="midnight", description="TimedRotatingFileHandler rotation unit.")
    log_file_interval: int = Field(default=1, ge=1)
    log_file_backup_count: int = Field(default=30, ge=0)
    log_file_utc: bool = True

    logfire_enabled: bool = False
    logfire_level: LogLevel = "INFO"
    logfire_token: Optional[str] = Field(default=None, description="Env: LOGGING__LOGFIRE_TOKEN.")


class ChainSettings(BaseSettings):
    """Configuration for the TON Center transaction index (HTTP)."""

    model_config = SettingsConfigDict(extra="ignore")

    base_url: str = Field(
        default="https://toncenter.com/api/v2",
        description="TON Center v2 API base URL.",
    )
    api_key: Optional[str] = Field(
        default=None,
        description="TON Center API key. Required to run the server. Env: CHAIN__API_KEY.",
    )
    timeout_seconds: float = Field(
        default=10.0,
        ge=1.0,
        le=120.0,
        description="Total time budget of a single chain request in seconds.",
    )
    max_retries: int = Field(
        default=1,
        ge=1,
        le=20,
        description="Attempts per chain request before it is reported as unavailable.",
    )
    scan_limit: int = Field(
        default=50,
        ge=1,
        le=256,
        description="Number of recent seller transactions scanned on confirmation.",
    )
    scan_window_seconds: int = Field(
        default=86400,
        ge=60,
        description="Transactions older than this (by chain time) are ignored by the scan.",
    )


class MarketplaceSettings(BaseSettings):
    """Token economics and marketplace defaults."""

    model_config = SettingsConfigDict(extra="ignore")

    platform_wallet_raw: Optional[str] = Field(
        default=None,
        description="Receiving wallet used when a token has no owner. Env: MARKETPLACE__PLATFORM_WALLET.",
        validation_alias="platform_wallet",
    )
    default_dynamic_price: float = Field(default=0.1, gt=0)
    price_impact_alpha: float = Field(
        default=0.005,
        ge=0,
        description="Linear price impact per token bought on user tokens.",
    )
    amount_epsilon: float = Field(
        default=1e-7,
        ge=0,
        description="Tolerance when comparing an on-chain value against the sale cost.",
    )
    history_limit: int = Field(default=100, ge=1, le=1000)

    @computed_field
    @property
    def platform_wallet(self) -> str:
        """Configured platform wallet, or the placeholder when unset."""
        raw = (self.platform_wallet_raw or "").strip()
        return raw or DEFAULT_PLATFORM_WALLET

    @property
    def platform_wallet_configured(self) -> bool:
        return bool((self.platform_wallet_raw or "").strip())


class ServerSettings(BaseSettings):
    """HTTP server (uvicorn) settings."""

    model_config = SettingsConfigDict(extra="ignore")

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    # Raw string from env so pydantic-settings does not try to JSON-decode it.
    cors_origins_raw: str = Field(default="*", validation_alias="cors_origins")

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated cors_origins_raw into a list."""
        return [s.strip() for s in self.cors_origins_raw.split(",") if s.strip()] or ["*"]


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. CHAIN__API_KEY, MARKETPLACE__PLATFORM_WALLET.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)
    marketplace: MarketplaceSettings = Field(default_factory=MarketplaceSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(chain={"api_key": "..."}).
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from coin_maker.config import get_settings

        settings = get_settings()
        timeout = settings.chain.timeout_seconds
    """
    return Settings()
