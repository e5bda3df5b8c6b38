"""Configuration subpackage."""

from watt_autoclaim.config.config import (
    ApiSettings,
    AppSettings,
    ClaimSettings,
    LoggingSettings,
    SellSettings,
    Settings,
    SolanaSettings,
    get_settings,
    validate_run_settings,
    validate_sell_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "ClaimSettings",
    "LoggingSettings",
    "SellSettings",
    "Settings",
    "SolanaSettings",
    "get_settings",
    "validate_run_settings",
    "validate_sell_settings",
]
