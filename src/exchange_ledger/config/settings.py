"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".exchange-ledger"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EXCHANGE_LEDGER_",
    )

    app_name: str = "Exchange Ledger"
    app_version: str = "0.1.0"

    # Data directory (holds the SQLite store when database_url is not set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"
    # Level for exchange_ledger.* alone (skip and over-sell warnings); log_level when unset
    ledger_log_level: Optional[str] = None

    # Local settlement currency every figure pivots through
    settlement_currency: str = "BDT"

    # Reporting precision
    money_places: int = 2
    rate_places: int = 4

    # Invalidate-on-write report cache. The store's writer calls
    # POST /money-exchange/cache/invalidate; the TTL bounds staleness otherwise.
    report_cache_enabled: bool = False
    report_cache_max_entries: int = 256
    report_cache_ttl_seconds: float = 60.0

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "exchange.db"
        return f"sqlite:///{db_path}"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
