"""
Inventory ledger settings.

Every section is a pydantic-settings model with its own env prefix
(STORAGE_, API_, AUTH_, INVENTORY_, NOTIFY_); a .env file is read too.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Accepted outside production only
DEV_SECRET_KEY = "change-me-in-production"


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "inventory.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class AuthSettings(BaseSettings):
    """Authentication configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    secret_key: str = DEV_SECRET_KEY
    algorithm: str = "HS256"
    token_expire_minutes: int = 480
    bcrypt_rounds: int = 12


class InventorySettings(BaseSettings):
    """Ledger and product defaults."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    max_movement_quantity: int = 100_000
    default_min_stock_level: int = 10
    default_unit: str = "pcs"

    # Transaction feed
    default_feed_limit: int = 50
    max_feed_limit: int = 500


class NotificationSettings(BaseSettings):
    """Low-stock alert channel configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_")

    telegram_bot_token: str | None = None
    telegram_api_base: str = "https://api.telegram.org"
    default_chat_id: str | None = None
    timeout: int = 10
    queue_size: int = 1000

    # Retry on transport errors
    max_retries: int = 3
    retry_delay: float = 0.5


class Settings(BaseSettings):
    """Root settings; each section reads its own env prefix."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Inventory Ledger"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    seed_demo_data: bool = False

    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    notify: NotificationSettings = Field(default_factory=NotificationSettings)

    @model_validator(mode="after")
    def check_consistency(self) -> "Settings":
        if self.inventory.default_feed_limit > self.inventory.max_feed_limit:
            raise ValueError("INVENTORY_DEFAULT_FEED_LIMIT exceeds INVENTORY_MAX_FEED_LIMIT")
        if self.environment == "production" and self.auth.secret_key == DEV_SECRET_KEY:
            raise ValueError("AUTH_SECRET_KEY must be set in production")
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
