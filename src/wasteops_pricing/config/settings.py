"""Runtime settings using Pydantic BaseSettings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Existing customer snapshot used by the serviceability check
    customers_data_path: Path = Field(
        default_factory=lambda: Path("./data/geocoded_customers.json"),
        alias="CUSTOMERS_DATA_PATH",
    )

    # Optional YAML file with PricingConfig overrides, applied at startup
    pricing_config_path: Path | None = Field(default=None, alias="PRICING_CONFIG_PATH")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings()
