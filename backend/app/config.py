# backend/app/config.py
"""
Configuration management for the Classroom Seating Planner.
Uses Pydantic for settings validation and environment variable management.
"""

import os
from typing import Optional, List, Any
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from seating_engine.config import ArrangementConfig, GridBounds


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Application settings
    APP_NAME: str = "Classroom Seating Planner"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", alias="ENV")

    # Classroom layout
    DEFAULT_ROWS: int = Field(default=5, alias="DEFAULT_ROWS")
    DEFAULT_COLUMNS: int = Field(default=6, alias="DEFAULT_COLUMNS")
    MAX_ROWS: int = Field(default=20, alias="MAX_ROWS")
    MAX_COLUMNS: int = Field(default=12, alias="MAX_COLUMNS")

    # Arrangement engine settings
    ARRANGEMENT_RESTARTS: int = Field(default=6, alias="ARRANGEMENT_RESTARTS")
    ARRANGEMENT_MAX_REPAIR_PASSES: int = Field(
        default=50, alias="ARRANGEMENT_MAX_REPAIR_PASSES"
    )
    ARRANGEMENT_SEED: Optional[int] = Field(default=None, alias="ARRANGEMENT_SEED")
    OPTIMIZE_TIMEOUT_SECONDS: float = Field(
        default=10.0, alias="OPTIMIZE_TIMEOUT_SECONDS"
    )

    # CORS settings
    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:5173",  # Vite frontend
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://localhost:8000",
        ],
        alias="CORS_ORIGINS",
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", alias="LOG_LEVEL")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("CORS_ORIGINS", mode="before")
    def parse_comma_separated(cls, v: Any) -> Any:
        """Parse comma-separated strings from env vars into lists."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("MAX_ROWS", "MAX_COLUMNS", "DEFAULT_ROWS", "DEFAULT_COLUMNS")
    def at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("grid dimensions must be at least 1")
        return v

    @field_validator("ARRANGEMENT_RESTARTS", "ARRANGEMENT_MAX_REPAIR_PASSES")
    def not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("search budget cannot be negative")
        return v

    @property
    def grid_bounds(self) -> GridBounds:
        """Bounds used to clamp user supplied rows and columns."""
        return GridBounds(max_rows=self.MAX_ROWS, max_columns=self.MAX_COLUMNS)

    @property
    def arrangement_config(self) -> ArrangementConfig:
        """Search budget handed to the arrangement engine."""
        return ArrangementConfig(
            max_repair_passes=self.ARRANGEMENT_MAX_REPAIR_PASSES,
            restarts=self.ARRANGEMENT_RESTARTS,
            seed=self.ARRANGEMENT_SEED,
        )

    @property
    def is_production(self) -> bool:
        return (self.ENVIRONMENT or "").lower() == "production"


class DevelopmentSettings(Settings):
    """Development environment specific settings."""

    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"


class ProductionSettings(Settings):
    """Production environment specific settings."""

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


class TestingSettings(Settings):
    """Testing environment specific settings."""

    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    ARRANGEMENT_SEED: Optional[int] = 42


@lru_cache()
def get_settings() -> Settings:
    """
    Load and return the appropriate settings based on the ENVIRONMENT variable.
    Caches the result to prevent reading the .env file on every call.
    """
    environment = os.getenv("ENVIRONMENT", "development").lower()

    if environment == "production":
        return ProductionSettings()
    if environment in ("test", "testing"):
        return TestingSettings()
    return DevelopmentSettings()


def validate_settings(settings: Settings) -> List[str]:
    """Validate settings and return list of issues."""
    issues: List[str] = []

    if not settings.DEFAULT_ROWS <= settings.MAX_ROWS:
        issues.append("DEFAULT_ROWS exceeds MAX_ROWS and will be clamped")
    if not settings.DEFAULT_COLUMNS <= settings.MAX_COLUMNS:
        issues.append("DEFAULT_COLUMNS exceeds MAX_COLUMNS and will be clamped")
    if settings.OPTIMIZE_TIMEOUT_SECONDS <= 0:
        issues.append("OPTIMIZE_TIMEOUT_SECONDS must be positive")
    if settings.is_production and settings.ARRANGEMENT_SEED is not None:
        issues.append("ARRANGEMENT_SEED is fixed in production; restarts repeat")

    return issues


def setup_logging(settings: Settings):
    """Setup logging configuration for scripts that do not run under uvicorn."""
    import logging

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    formatter = logging.Formatter(settings.LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


__all__ = [
    "Settings",
    "get_settings",
    "validate_settings",
    "setup_logging",
    "DevelopmentSettings",
    "ProductionSettings",
    "TestingSettings",
]
