"""Configuration loader for the Reading Tracker application."""

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Reading Tracker"
    version: str = "1.0.0"


class StorageConfig(BaseModel):
    """Storage paths configuration."""

    sqlite_path: str = "./db/reading_tracker.db"


class GoalDefaults(BaseModel):
    """Targets used when no goal has been persisted yet."""

    target_books: int = Field(default=12, gt=0)
    target_pages: int = Field(default=5000, gt=0)
    daily_pages: int = Field(default=30, gt=0)


class StatsConfig(BaseModel):
    """Statistics derivation configuration."""

    first_weekday: int = Field(default=0, ge=0, le=6)  # 0 = Monday, 6 = Sunday
    monthly_trend_months: int = Field(default=6, gt=0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    goals: GoalDefaults = Field(default_factory=GoalDefaults)
    stats: StatsConfig = Field(default_factory=StatsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Environment overrides
    db_path = os.getenv("READING_TRACKER_DB_PATH")
    if db_path:
        config.storage.sqlite_path = db_path
    log_level = os.getenv("READING_TRACKER_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    return config


def configure_logging(config: AppConfig) -> None:
    """Apply the configured level and format to the root logger."""
    logging.basicConfig(level=config.logging.level, format=config.logging.format)
