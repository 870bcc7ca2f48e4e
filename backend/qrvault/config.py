"""
QRVault Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a default `settings` object.
Who:   Read by `create_app()` and by `python -m qrvault`; everything below the
       application factory receives explicit values instead of importing this.
When:  The default instance is loaded at module import time; tests build their
       own `Settings(...)` and pass it to `create_app()`.

Environment variables (case-insensitive):
    PORT, HOST, DB_PATH, LOG_LEVEL, QR_SIZE, QR_ERROR_CORRECTION, LIST_LIMIT
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development; a container
    deployment usually overrides only PORT and DB_PATH.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # ── Database ──────────────────────────────────────────────────────────
    # What: Path of the SQLite database file; its directory is created on startup
    db_path: str = Field(
        default="./data/qrcodes.db",
        min_length=1,
        description="Filesystem path of the SQLite database",
    )

    # ── QR Rendering ──────────────────────────────────────────────────────
    # What: Edge length in pixels of every generated PNG
    qr_size: int = Field(default=256, ge=32, le=2048)

    # What: QR error-correction level (L ≈ 7%, M ≈ 15%, Q ≈ 25%, H ≈ 30% recovery)
    qr_error_correction: str = Field(default="M")

    # ── Listing ───────────────────────────────────────────────────────────
    # What: How many of the most recent codes the index page shows
    list_limit: int = Field(default=100, ge=1, le=1000)

    # ── Logging ───────────────────────────────────────────────────────────
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

    @field_validator("qr_error_correction")
    @classmethod
    def validate_error_correction(cls, v: str) -> str:
        """Ensures the error-correction level is one of the four QR levels."""
        upper = v.upper()
        if upper not in {"L", "M", "Q", "H"}:
            raise ValueError(
                f"Invalid qr_error_correction '{v}'. Must be one of: L, M, Q, H"
            )
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_PATH and db_path both work
    }


# Default instance used by `qrvault.main:app` and `python -m qrvault`
settings = Settings()
