"""Configuration subpackage."""

from coin_maker.config.config import (
    DEFAULT_PLATFORM_WALLET,
    AppSettings,
    ChainSettings,
    LoggingSettings,
    MarketplaceSettings,
    ServerSettings,
    Settings,
    get_settings,
)

__all__ = [
    "DEFAULT_PLATFORM_WALLET",
    "AppSettings",
    "ChainSettings",
    "LoggingSettings",
    "MarketplaceSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
]
