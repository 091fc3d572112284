"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory based on platform."""
    return Path.home() / ".tradeleague"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TRADELEAGUE_",
    )

    app_name: str = "Trade League"
    app_version: str = "0.1.0"

    # Data directory (all app data lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Game rules
    starting_cash: Decimal = Decimal("10000.00")
    max_price_per_share: Decimal = Decimal("1000000")

    # Quote cache
    quote_cache_ttl_seconds: float = 60
    serve_stale_quotes: bool = True
    quote_fetch_timeout_seconds: float = 10
    quote_fetch_workers: int = 8

    # Leaderboard bulk refresh gate
    refresh_cooldown_seconds: float = 60 * 60

    # Upstream quote provider
    quote_provider: Literal["stub", "ninja"] = "stub"
    ninja_api_key: Optional[str] = None
    ninja_base_url: str = "https://api.api-ninjas.com/v1"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "tradeleague.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
