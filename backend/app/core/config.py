# backend/app/core/config.py
"""
Application configuration using pydantic-settings.

Security considerations:
- No hardcoded secrets in production (SECRET_KEY must be set via env)
- CORS_ORIGINS parsed from comma-separated env var, never defaults to "*"
- Database URLs normalized for async drivers automatically
- Storage backend is a closed choice ("local" or "s3"), checked at load time
"""
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

INSECURE_DEV_KEY = "INSECURE_DEV_KEY_CHANGE_IN_PRODUCTION"


class Settings(BaseSettings):
    """
    Strictly typed application settings.

    Priority for loading:
    1. Environment variables (highest priority)
    2. .env file (via pydantic-settings)
    3. Default values (lowest priority, dev-safe only)
    """

    # ─────────────────────────────────────────────────────────────
    # Application metadata
    # ─────────────────────────────────────────────────────────────
    PROJECT_NAME: str = "Filehold"
    PROJECT_VERSION: str = "1.0.0"
    API_PREFIX: str = ""

    ENVIRONMENT: str = "development"

    # ─────────────────────────────────────────────────────────────
    # Security: JWT Configuration
    # Access and refresh tokens share the signing secret
    # ─────────────────────────────────────────────────────────────
    SECRET_KEY: str = INSECURE_DEV_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # bcrypt work factor
    BCRYPT_ROUNDS: int = 12

    # ─────────────────────────────────────────────────────────────
    # Database Configuration
    # postgres:// and sqlite:/// are normalized for async drivers
    # ─────────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./filehold.db"
    DATABASE_ECHO: bool = False

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_database_url(cls, v: Optional[str]) -> str:
        """
        Normalize database URLs for async SQLAlchemy compatibility.

        Conversions:
        - postgres://     → postgresql+asyncpg://
        - postgresql://   → postgresql+asyncpg://
        - sqlite:///      → sqlite+aiosqlite:///
        """
        if v is None:
            return "sqlite+aiosqlite:///./filehold.db"

        url = v.strip()

        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)

        if url.startswith("postgresql://") and "+asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)

        if url.startswith("sqlite:///") and "+aiosqlite" not in url:
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)

        return url

    # ─────────────────────────────────────────────────────────────
    # CORS Configuration
    # Parsed from comma-separated CORS_ORIGINS env var
    # ─────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:8000,http://127.0.0.1:8000"

    @property
    def BACKEND_CORS_ORIGINS(self) -> List[str]:
        """
        Parse CORS_ORIGINS string into a list of allowed origins.

        Empty string returns empty list, NOT wildcard "*".
        """
        if not self.CORS_ORIGINS or not self.CORS_ORIGINS.strip():
            return []

        return [
            origin.strip()
            for origin in self.CORS_ORIGINS.split(",")
            if origin.strip()
        ]

    # ─────────────────────────────────────────────────────────────
    # Blob storage
    # "local" writes under UPLOAD_DIR and serves files at APP_URL/files/<key>
    # "s3" writes to BUCKET_NAME with a public-read ACL
    # ─────────────────────────────────────────────────────────────
    STORAGE_TYPE: Literal["local", "s3"] = "local"
    UPLOAD_DIR: str = "./tmp/uploads"
    APP_URL: str = "http://localhost:8000"

    MAX_UPLOAD_SIZE: int = 2 * 1024 * 1024
    ALLOWED_MIME_TYPES: str = "image/jpeg,image/pjpeg,image/png,image/gif"

    AWS_DEFAULT_REGION: str = "us-east-1"
    BUCKET_NAME: Optional[str] = None
    # Left unset, boto3 falls back to its own credential chain
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None

    @property
    def allowed_mime_types(self) -> List[str]:
        return [
            mime.strip().lower()
            for mime in self.ALLOWED_MIME_TYPES.split(",")
            if mime.strip()
        ]

    @property
    def public_base_url(self) -> str:
        return self.APP_URL.rstrip("/")

    # ─────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────
    LOG_LEVEL: str = "info"
    # One line per request is appended here when set
    ACCESS_LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def check_consistency(self) -> "Settings":
        """Reject combinations that would only fail later, at request time."""
        if self.STORAGE_TYPE == "s3" and not self.BUCKET_NAME:
            raise ValueError("BUCKET_NAME must be set when STORAGE_TYPE is 's3'")

        if self.is_production and self.SECRET_KEY == INSECURE_DEV_KEY:
            raise ValueError("SECRET_KEY must be set in production")

        if self.MAX_UPLOAD_SIZE <= 0:
            raise ValueError("MAX_UPLOAD_SIZE must be positive")

        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database (local development)."""
        return "sqlite" in self.DATABASE_URL.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance.

    Settings are loaded once, giving consistent configuration
    across the application.
    """
    return Settings()


# Existing code imports `settings` directly from this module
settings = get_settings()
