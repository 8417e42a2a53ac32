"""Main application entry point - serves the HTTP API and bot webhook."""

import sys

import uvicorn

from src import __version__
from src.config.settings import settings
from src.utils.logger import logger
from src.utils.validators import ConfigValidator


def main():
    """Validate configuration, then run the API server."""
    logger.info("=" * 60)
    logger.info(f"Team Reports v{__version__}")
    logger.info("=" * 60)

    # Validate configuration
    is_valid, errors = ConfigValidator.validate_all()

    if not is_valid:
        logger.error("Configuration validation failed:")
        for error in errors:
            logger.error(f"  - {error}")
        sys.exit(1)

    logger.info("✓ Configuration validated successfully")
    logger.info(f"✓ Mini App URL: {settings.webapp_url}")
    logger.info(
        f"✓ Admin IDs: {len(settings.admin_ids)} configured"
        if settings.admin_ids
        else "✓ Admin IDs: none configured"
    )
    logger.info(
        "✓ Google Sheets: enabled"
        if settings.sheets_configured
        else "✓ Google Sheets: disabled"
    )
    logger.info(f"✓ Listening on {settings.API_HOST}:{settings.API_PORT}")

    try:
        uvicorn.run(
            "src.api.app:app",
            host=settings.API_HOST,
            port=settings.API_PORT,
            log_level=settings.LOG_LEVEL.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
