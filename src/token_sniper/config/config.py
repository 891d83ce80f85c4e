# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, CHAIN__RPC_URL.
List-valued sections (SNIPER__AUTO_MONITOR, CONTRACT_MONITOR__WALLETS) are JSON.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "token-sniper"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: LogLevel = "INFO"
    file_level: LogLevel = "INFO"
    logfire_level: LogLevel = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/token_sniper.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the Farcaster feed API (Neynar v2 over HTTP)."""

    model_config = SettingsConfigDict(extra="ignore")

    feed_api_host: str = Field(
        default="https://api.neynar.com",
        description="Neynar API base URL.",
    )
    feed_api_key: Optional[str] = Field(default=None, description="Neynar API key.")
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=4,
        ge=1,
        le=20,
        description="Maximum number of retries for failed requests.",
    )


class ChainSettings(BaseSettings):
    """Base network RPC, signing wallet and purchase limits (from env CHAIN__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    rpc_url: str = Field(default="https://mainnet.base.org", description="JSON-RPC endpoint.")
    chain_id: int = Field(default=8453, description="Chain ID (8453 for Base mainnet).")
    private_key: Optional[str] = Field(default=None, description="Signing wallet private key.")
    wallet_address: Optional[str] = Field(
        default=None,
        description="Buyer wallet; derived from private_key when unset.",
    )
    gas_limit: int = Field(default=500_000, ge=21_000, le=30_000_000)
    receipt_timeout_seconds: float = Field(default=120.0, ge=1.0, le=3600.0)
    secondary_asset_address: str = Field(
        default="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        description="Fallback funding asset (USDC on Base).",
    )
    secondary_asset_decimals: int = Field(default=6, ge=0, le=36)


class AutoMonitorIdentity(BaseModel):
    """Feed identity added to the watchlist on startup."""

    identifier: str
    buy_amount: Decimal = Field(gt=0)
    slippage_percent: Optional[float] = Field(default=None, ge=0, lt=100)
    description: Optional[str] = None


class WatchedWalletConfig(BaseModel):
    """Deployer wallet watched for contract creations and activations."""

    address: str
    buy_amount: Decimal = Field(gt=0)
    slippage_percent: float = Field(default=15.0, ge=0, lt=100)
    description: str = ""


class SniperSettings(BaseSettings):
    """Feed-driven sniping (from env SNIPER__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True
    default_buy_amount: Decimal = Field(default=Decimal("0.01"), gt=0)
    default_slippage_percent: float = Field(default=5.0, ge=0, lt=100)
    check_interval_seconds: float = Field(default=30.0, ge=1.0, le=3600.0)
    recent_posts_limit: int = Field(default=50, ge=1, le=150)
    submission_delay_seconds: float = Field(
        default=2.0,
        ge=0.0,
        le=60.0,
        description="Pause between candidate submissions (upstream rate limits).",
    )
    tax_probe_amount: Decimal = Field(default=Decimal("0.01"), gt=0)
    capability_probe_amount: Decimal = Field(default=Decimal("0.001"), gt=0)
    auto_monitor: list[AutoMonitorIdentity] = Field(
        default_factory=lambda: [
            AutoMonitorIdentity(
                identifier="jessepollak",
                buy_amount=Decimal("0.01"),
                slippage_percent=15.0,
                description="Zora creator coin target",
            )
        ]
    )


class ContractMonitorSettings(BaseSettings):
    """Contract-creation monitoring (from env CONTRACT_MONITOR__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True
    check_interval_seconds: float = Field(default=30.0, ge=1.0, le=3600.0)
    block_window: int = Field(default=100, ge=1, le=10_000)
    secondary_target_amount: Decimal = Field(
        default=Decimal("100"),
        ge=0,
        description="Secondary-asset balance (whole units) that still allows a purchase.",
    )
    wallets: list[WatchedWalletConfig] = Field(
        default_factory=lambda: [
            WatchedWalletConfig(
                address="0xd211b9417f28d128435cd8d022aeaebbc8a28f17",
                buy_amount=Decimal("0.035"),
                slippage_percent=15.0,
                description="Creator coin deployer",
            )
        ]
    )

    @field_validator("wallets")
    @classmethod
    def _lowercase_addresses(cls, wallets: list[WatchedWalletConfig]) -> list[WatchedWalletConfig]:
        return [w.model_copy(update={"address": w.address.strip().lower()}) for w in wallets]


class TelegramNotificationSettings(BaseSettings):
    """Telegram notifications (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    api_key: Optional[str] = Field(default=None, description="Telegram bot API key.")
    chat_id: Optional[str] = Field(default=None, description="Telegram chat ID.")
    messages_per_minute: int = Field(default=30, ge=1, le=120)
    max_retries: int = Field(default=5, ge=0, le=20)
    backoff_base_seconds: float = Field(default=1.0, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, CHAIN__RPC_URL.
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
    chain: ChainSettings = Field(default_factory=ChainSettings)
    sniper: SniperSettings = Field(default_factory=SniperSettings)
    contract_monitor: ContractMonitorSettings = Field(default_factory=ContractMonitorSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(sniper={"submission_delay_seconds": 0}).
        """
        return cls(**overrides)

    def missing_required(self) -> list[str]:
        """Return env var names required to start monitoring that are unset."""
        missing: list[str] = []
        if not (self.api.feed_api_key or "").strip():
            missing.append("API__FEED_API_KEY")
        if not (self.chain.rpc_url or "").strip():
            missing.append("CHAIN__RPC_URL")
        if not (self.chain.private_key or "").strip():
            missing.append("CHAIN__PRIVATE_KEY")
        return missing


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from token_sniper.config import get_settings

        settings = get_settings()
        interval = settings.sniper.check_interval_seconds
    """
    return Settings()
