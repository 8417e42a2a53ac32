"""Team Reports - Telegram Mini App team reporting backend."""

__version__ = "1.0.0"
