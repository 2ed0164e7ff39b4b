"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "Trade Review Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "info"

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:5173"]

    # Bars data
    data_source: str = "parquet"  # Options: parquet, demo
    bars_data_path: str = "data/bars.parquet"  # File or directory of parquet files

    # Precomputed indicator columns, in the order series are returned
    indicator_columns: list[str] = [
        "vwap",
        "vwapn",
        "vwapd",
        "ema_9",
        "ema_14",
        "ema_21",
        "rsi_14_ema",
        "rsi_14_wilder",
        "atr_14",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
