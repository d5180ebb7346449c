"""
SightSharing Backend: Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running the server from the
    repository root on a developer machine.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Async SQLite connection string using the aiosqlite driver
    # Format: sqlite+aiosqlite:///<path to database file>
    database_url: str = Field(
        default="sqlite+aiosqlite:///./travel_destinations.db",
        description="Async SQLAlchemy connection URL for the destinations store",
    )

    # ── File Storage ──────────────────────────────────────────────────────
    # What: Root directory for stored images. Uploaded files land in
    # <storage_root>/uploads/temp and are re-encoded into <storage_root>/uploads.
    # Stored references are relative to this root ("uploads/<name>").
    storage_root: str = Field(default="./storage")

    # What: Directory holding the client's static assets (css/, images/)
    static_root: str = Field(default="./client")

    # What: JPEG quality used when re-encoding uploads
    # Valid range: 1-95 (Pillow treats values above 95 as near-lossless)
    jpeg_quality: int = Field(default=80, ge=1, le=95)

    # ── Gallery ───────────────────────────────────────────────────────────
    # What: Number of destination cards per gallery page
    gallery_page_size: int = Field(default=9, ge=1, le=100)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def uploads_dir(self) -> Path:
        """Permanent image directory (served under /uploads)."""
        return Path(self.storage_root) / "uploads"

    @property
    def temp_uploads_dir(self) -> Path:
        """Landing directory for raw uploads before re-encoding."""
        return self.uploads_dir / "temp"

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
