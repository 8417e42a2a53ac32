"""Configuration validation."""

from typing import List, Tuple
from urllib.parse import urlparse

from src.config.settings import settings


class ConfigValidator:
    """Validate configuration on startup."""

    @staticmethod
    def validate_all() -> Tuple[bool, List[str]]:
        """
        Validate all configuration settings.

        Returns:
            (is_valid, error_messages)
        """
        errors = []

        # Validate Telegram config
        if not settings.TELEGRAM_BOT_TOKEN:
            errors.append("TELEGRAM_BOT_TOKEN is required")

        invalid_admin_ids = [
            part.strip()
            for part in settings.TELEGRAM_ADMIN_IDS.split(",")
            if part.strip() and not part.strip().lstrip("-").isdigit()
        ]
        if invalid_admin_ids:
            errors.append(
                f"TELEGRAM_ADMIN_IDS contains non-numeric entries: {', '.join(invalid_admin_ids)}"
            )

        if settings.TELEGRAM_TIMEOUT_SECONDS <= 0:
            errors.append("TELEGRAM_TIMEOUT_SECONDS must be positive")

        # Validate Mini App URL
        parsed_url = urlparse(settings.PUBLIC_APP_URL)
        if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
            errors.append("PUBLIC_APP_URL must be an absolute http(s) URL")

        # Validate Google Sheets config (optional, but all-or-nothing)
        has_credentials = bool(
            settings.GOOGLE_SERVICE_ACCOUNT_JSON or settings.GOOGLE_SERVICE_ACCOUNT_FILE
        )
        if settings.GOOGLE_SHEETS_ID and not has_credentials:
            errors.append(
                "GOOGLE_SHEETS_ID is set but no service account credentials "
                "(GOOGLE_SERVICE_ACCOUNT_JSON or GOOGLE_SERVICE_ACCOUNT_FILE)"
            )
        if settings.GOOGLE_SHEETS_TIMEOUT_SECONDS <= 0:
            errors.append("GOOGLE_SHEETS_TIMEOUT_SECONDS must be positive")

        # Validate database config
        if not settings.DATABASE_URL and not settings.DB_NAME:
            errors.append("DATABASE_URL or DB_NAME is required")

        is_valid = len(errors) == 0
        return is_valid, errors
