"""
Configuration management.

Centralized environment variable management and validation.
"""

from typing import Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from shared.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow case-insensitive env var matching
        extra="ignore"
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    # Logging
    # LOG_DIR: directory for the rotating app.log file, empty to log to stdout only
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_dir: str = "logs"

    # Storage
    # UPLOADS_DIR holds uploaded images/music, composed videos and metadata documents
    # MINTS_FILE is the JSON snapshot of the mint registry
    uploads_dir: str = "uploads"
    mints_file: str = "mints.json"
    static_dir: str = "public"
    max_upload_size_mb: int = 50

    # Public URLs
    # PUBLIC_BASE_URL prefixes every URL embedded in NFT metadata documents
    public_base_url: str = "https://r3g1m3n.xyz"
    frontend_url: str = "http://localhost:3000"  # Frontend domain for CORS

    # Media tools
    ffmpeg_binary: str = "ffmpeg"
    ffprobe_binary: str = "ffprobe"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    @field_validator("public_base_url")
    @classmethod
    def validate_public_base_url(cls, v: str) -> str:
        """Validate public base URL format and strip trailing slash."""
        if not v:
            raise ConfigError("PUBLIC_BASE_URL is required")
        if not v.startswith(("http://", "https://")):
            raise ConfigError("PUBLIC_BASE_URL must be a valid HTTP/HTTPS URL")
        return v.rstrip("/")

    @field_validator("frontend_url")
    @classmethod
    def validate_frontend_url(cls, v: str) -> str:
        """Validate frontend URL format."""
        if not v:
            raise ConfigError("FRONTEND_URL is required")
        if not v.startswith(("http://", "https://")):
            raise ConfigError("FRONTEND_URL must be a valid HTTP/HTTPS URL")
        return v

    @field_validator("max_upload_size_mb")
    @classmethod
    def validate_max_upload_size_mb(cls, v: int) -> int:
        """Validate upload size limit."""
        if v <= 0:
            raise ConfigError("MAX_UPLOAD_SIZE_MB must be positive")
        return v

    @field_validator("uploads_dir", "mints_file")
    @classmethod
    def validate_required_path(cls, v: str) -> str:
        """Validate storage paths are not empty."""
        if not v or not v.strip():
            raise ConfigError("UPLOADS_DIR and MINTS_FILE must not be empty")
        return v

    @property
    def max_upload_size_bytes(self) -> int:
        """Upload size limit in bytes."""
        return self.max_upload_size_mb * 1024 * 1024


# Singleton instance
try:
    settings = Settings()
except Exception as e:
    # Re-raise as ConfigError for consistency
    if isinstance(e, ConfigError):
        raise
    raise ConfigError(f"Failed to load configuration: {str(e)}") from e
