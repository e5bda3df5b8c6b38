# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. CLAIM__DRY_RUN, SELL__PERCENTAGE, SOLANA__RPC_URL.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from watt_autoclaim.constants import SELLABLE_TOKENS
from watt_autoclaim.exceptions import ConfigurationError, MissingRequiredConfigError


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(env_prefix="APP__", extra="ignore")

    app_name: str = "watt-autoclaim"
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(env_prefix="LOGGING__", extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Local outputs; the file is the run's audit trail and is appended to
    log_to_console: bool = True
    log_to_file: bool = True
    log_file_path: str = "logs/autoclaim.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Output format: "[ts] [LEVEL] event k=v" lines if False, JSONRenderer if True
    json_format: bool = False

    # Logfire integration via structlog
    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the Jupiter swap API (HTTP)."""

    model_config = SettingsConfigDict(env_prefix="API__", extra="ignore")

    jupiter_api_host: str = Field(
        default="https://lite-api.jup.ag/swap/v1",
        description="Jupiter swap API base URL (v1 endpoints /quote and /swap).",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Maximum number of attempts for idempotent requests.",
    )


class SolanaSettings(BaseSettings):
    """Solana RPC endpoint, wallet and confirmation policy (from env SOLANA__*)."""

    model_config = SettingsConfigDict(env_prefix="SOLANA__", extra="ignore")

    rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com",
        description="Solana JSON-RPC endpoint (may carry an API key in the query string).",
    )
    private_key: Optional[str] = Field(
        default=None,
        description="Wallet secret key: base58 string or JSON byte array.",
    )
    commitment: Literal["processed", "confirmed", "finalized"] = "confirmed"
    confirm_timeout_seconds: float = Field(
        default=60.0,
        ge=1.0,
        le=600.0,
        description="Upper bound on waiting for a submitted transaction to confirm.",
    )
    confirm_poll_seconds: float = Field(
        default=2.0,
        ge=0.1,
        le=30.0,
        description="Interval between signature status polls.",
    )
    explorer_tx_url: str = Field(
        default="https://solscan.io/tx/",
        description="Prefix used to log explorer links for signatures.",
    )


class ClaimSettings(BaseSettings):
    """Claim stage configuration (from env CLAIM__*)."""

    model_config = SettingsConfigDict(env_prefix="CLAIM__", extra="ignore")

    min_claimable: Decimal = Field(
        default=Decimal("1"),
        ge=0,
        description="Minimum claimed WATT required before auto-sell runs; dry-run stand-in amount.",
    )
    dry_run: bool = Field(
        default=True,
        description="When true nothing is signed or submitted. Set CLAIM__DRY_RUN=false for live mode.",
    )


class SellSettings(BaseSettings):
    """Auto-sell configuration (from env SELL__*).

    percentage and token carry no field constraints; validate_sell_settings and
    SellPolicy reject out-of-range values with ConfigurationError.
    """

    model_config = SettingsConfigDict(env_prefix="SELL__", extra="ignore")

    enabled: bool = False
    token: str = Field(default="SOL", description="Output asset: SOL, USDC or USDT.")
    percentage: Decimal = Field(default=Decimal("100"), description="Share of the claim to sell (0-100).")
    min_price_usd: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Minimum WATT price in USD; 0 disables the gate and allows unverified sells.",
    )
    slippage_bps: int = Field(default=100, ge=0, le=10_000)
    priority_fee_lamports: int = Field(
        default=0,
        ge=0,
        description="Max priority fee for the swap; 0 leaves it to the aggregator.",
    )


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. SELL__PERCENTAGE, SOLANA__RPC_URL.
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
    api: ApiSettings = Field(default_factory=ApiSettings)
    solana: SolanaSettings = Field(default_factory=SolanaSettings)
    claim: ClaimSettings = Field(default_factory=ClaimSettings)
    sell: SellSettings = Field(default_factory=SellSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(sell={"percentage": 50}).

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


def validate_sell_settings(sell: SellSettings) -> None:
    """Raise ConfigurationError if the sell percentage or output token is invalid."""
    if sell.percentage < 0 or sell.percentage > 100:
        raise ConfigurationError(
            f"Invalid SELL__PERCENTAGE: {sell.percentage}. Must be between 0 and 100"
        )
    if sell.token.upper() not in SELLABLE_TOKENS:
        raise ConfigurationError(
            f"Invalid SELL__TOKEN: {sell.token}. Must be one of {', '.join(SELLABLE_TOKENS)}"
        )


def validate_run_settings(settings: Settings) -> None:
    """Check everything a run needs before touching the network.

    Raises:
        MissingRequiredConfigError: If SOLANA__PRIVATE_KEY is not set.
        ConfigurationError: If the sell configuration is invalid.
    """
    if not settings.solana.private_key or not settings.solana.private_key.strip():
        raise MissingRequiredConfigError("SOLANA__PRIVATE_KEY")
    if settings.sell.enabled:
        validate_sell_settings(settings.sell)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from watt_autoclaim.config import get_settings

        settings = get_settings()
        dry_run = settings.claim.dry_run
    """
    return Settings()
