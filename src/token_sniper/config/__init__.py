"""Configuration subpackage."""

from token_sniper.config.config import (
    ApiSettings,
    AppSettings,
    AutoMonitorIdentity,
    ChainSettings,
    ConsoleNotificationSettings,
    ContractMonitorSettings,
    LoggingSettings,
    Settings,
    SniperSettings,
    TelegramNotificationSettings,
    WatchedWalletConfig,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "AutoMonitorIdentity",
    "ChainSettings",
    "ContractMonitorSettings",
    "LoggingSettings",
    "Settings",
    "SniperSettings",
    "TelegramNotificationSettings",
    "ConsoleNotificationSettings",
    "WatchedWalletConfig",
    "get_settings",
]
