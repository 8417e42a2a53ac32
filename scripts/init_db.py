#!/usr/bin/env python3
"""Initialize database using SQLAlchemy models and store the template catalog."""

from src.config.database import init_db
from src.services.core.template_registry import template_registry
from src.utils.logger import logger

if __name__ == "__main__":
    logger.info("Initializing database...")

    try:
        init_db()
        inserted = template_registry.ensure_synced(force=True)
        logger.info(f"✓ Database initialized successfully ({inserted} template(s) stored)")
    except Exception as e:
        logger.error(f"✗ Database initialization failed: {e}")
        raise
