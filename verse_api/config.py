"""
Verse API: Application Configuration
=====================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the data source pool and the entry point.
When:  Loaded once at module import time.

Note:
    The translation -> file mapping is NOT configured here. It is static and
    lives in `verse_api.registry`; only the directory holding the files is
    a setting.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults that match the container deployment
    (files under ./assets, port 8080).
    """

    # ── Translation Storage ───────────────────────────────────────────────
    # What: Directory containing the *.Sqlite3 translation modules
    # Relative paths are resolved against the process working directory
    assets_dir: str = Field(default="assets")

    # ── Connection Pools (one per translation) ────────────────────────────
    # What: Idle connections kept open per translation
    db_pool_size: int = Field(default=5, ge=1, le=50)

    # What: Connections allowed above the idle floor under load
    # Ceiling per translation = db_pool_size + db_max_overflow (default 25)
    db_max_overflow: int = Field(default=20, ge=0, le=100)

    # What: Seconds a request waits for a free connection once the ceiling is hit
    db_pool_timeout: float = Field(default=30.0, gt=0, le=300)

    # What: Validates connections on checkout with a lightweight round trip
    db_pool_pre_ping: bool = Field(default=True)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

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
        "case_sensitive": False,  # PORT and port both work
    }

    @property
    def pool_ceiling(self) -> int:
        """Maximum concurrently open connections per translation."""
        return self.db_pool_size + self.db_max_overflow


# Singleton instance, imported throughout the application
settings = Settings()
