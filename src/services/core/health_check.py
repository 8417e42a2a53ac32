"""Health check service - system health monitoring."""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from src.config.report_templates import REPORT_TEMPLATES
from src.config.settings import settings
from src.repositories.base_repository import BaseRepository
from src.repositories.template_repository import TemplateRepository
from src.services.base_service import BaseService
from src.utils.logger import logger


class HealthCheckService(BaseService):
    """System health monitoring."""

    def __init__(self, db: Optional[Session] = None):
        super().__init__()
        self.db = db

    def check_all(self) -> dict:
        """
        Run all health checks.

        Google Sheets being unconfigured is reported but does not make the
        system unhealthy; reports still save without the mirror.

        Returns:
            Dict with overall status and individual check results
        """
        checks = {
            "database": self._check_database(),
            "telegram": self._check_telegram_config(),
            "templates": self._check_templates(),
            "google_sheets": self._check_google_sheets(),
        }

        all_healthy = all(check["healthy"] for check in checks.values())
        overall_status = "healthy" if all_healthy else "unhealthy"

        return {
            "status": overall_status,
            "checks": checks,
            "timestamp": datetime.utcnow().isoformat(),
        }

    def _check_database(self) -> dict:
        """Check database connectivity."""
        try:
            BaseRepository.check_connection(self.db)
            return {"healthy": True, "message": "Database connection OK"}
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {"healthy": False, "message": f"Database error: {str(e)}"}

    def _check_telegram_config(self) -> dict:
        """Check Telegram configuration."""
        if not settings.TELEGRAM_BOT_TOKEN:
            return {"healthy": False, "message": "Telegram bot token not configured"}

        if not settings.admin_ids:
            return {
                "healthy": True,
                "message": "Telegram configuration OK (no admin IDs configured)",
            }

        return {"healthy": True, "message": "Telegram configuration OK"}

    def _check_templates(self) -> dict:
        """Check that every catalog template has a stored row."""
        try:
            with TemplateRepository(self.db) as template_repo:
                stored = template_repo.count()
        except Exception as e:
            return {"healthy": False, "message": f"Template check error: {str(e)}"}

        expected = len(REPORT_TEMPLATES)
        if stored < expected:
            return {
                "healthy": False,
                "message": f"{stored}/{expected} templates stored (run sync-templates)",
                "stored_count": stored,
            }
        return {
            "healthy": True,
            "message": f"{stored} templates stored",
            "stored_count": stored,
        }

    def _check_google_sheets(self) -> dict:
        """Report whether the Google Sheets mirror is configured."""
        if not settings.sheets_configured:
            return {
                "healthy": True,
                "message": "Disabled (not configured)",
                "enabled": False,
            }
        return {
            "healthy": True,
            "message": f"Configured (spreadsheet {settings.GOOGLE_SHEETS_ID})",
            "enabled": True,
        }
