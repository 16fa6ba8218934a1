import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Storage Configuration
    storage_path: str = Field(
        "trade_state.json",
        description="JSON file backing the key-value store for saved teams.",
    )
    storage_key: str = Field(
        "three_way_trade_analyzer.v2",
        description="Key under which the teams collection is stored.",
    )

    # Editing Limits
    team_name_max_length: int = Field(
        32, gt=0, description="Maximum number of characters kept in a team name."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )
    log_file: Optional[str] = Field(
        None, description="Optional path of a rotating log file (console only when unset)."
    )
    log_rotation: str = Field(
        "10 MB", description="Size or interval at which the log file is rotated."
    )
    log_retention: str = Field(
        "7 days", description="How long rotated log files are kept."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
