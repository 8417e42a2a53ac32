"""Application settings and configuration management."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Database Configuration
    DATABASE_URL: Optional[str] = None  # Full URL (overrides DB_* components if set)
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "team_reports"
    DB_USER: str = "team_reports_user"
    DB_PASSWORD: Optional[str] = ""
    DB_SSLMODE: Optional[str] = None  # e.g., "require" for Neon
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # Telegram Configuration (REQUIRED)
    TELEGRAM_BOT_TOKEN: str
    TELEGRAM_ADMIN_IDS: str = ""  # Comma-separated Telegram user IDs
    TELEGRAM_WEBHOOK_SECRET: Optional[str] = None
    TELEGRAM_TIMEOUT_SECONDS: float = 10.0

    # Mini App
    PUBLIC_APP_URL: str = "http://localhost:3000"

    # Google Sheets (optional mirror of submitted reports)
    GOOGLE_SHEETS_ID: Optional[str] = None
    GOOGLE_SERVICE_ACCOUNT_JSON: Optional[str] = None  # Raw key file content
    GOOGLE_SERVICE_ACCOUNT_FILE: Optional[str] = None  # Path to key file
    GOOGLE_SHEETS_TIMEOUT_SECONDS: float = 15.0

    # API server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Legacy JSON file store (import source)
    DATA_DIR: str = "data"

    # Development Settings
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"  # Empty disables the file handler

    @property
    def database_url(self) -> str:
        """Get database URL for SQLAlchemy.

        If DATABASE_URL is set, use it directly (standard for PaaS platforms).
        Otherwise, assemble from individual DB_* components.
        Appends ?sslmode= if DB_SSLMODE is set (required for Neon).
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if self.DB_PASSWORD:
            url = f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        else:
            url = f"postgresql://{self.DB_USER}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

        if self.DB_SSLMODE:
            url += f"?sslmode={self.DB_SSLMODE}"
        return url

    @property
    def admin_ids(self) -> set[int]:
        """Parse TELEGRAM_ADMIN_IDS into a set of ints, skipping junk entries."""
        ids = set()
        for part in self.TELEGRAM_ADMIN_IDS.split(","):
            part = part.strip()
            if part.lstrip("-").isdigit():
                ids.add(int(part))
        return ids

    @property
    def webapp_url(self) -> str:
        """Public Mini App URL without a trailing slash."""
        return self.PUBLIC_APP_URL.rstrip("/")

    @property
    def sheets_configured(self) -> bool:
        """True when a spreadsheet and service account credentials are set."""
        return bool(
            self.GOOGLE_SHEETS_ID
            and (self.GOOGLE_SERVICE_ACCOUNT_JSON or self.GOOGLE_SERVICE_ACCOUNT_FILE)
        )


# Global settings instance
settings = Settings()
