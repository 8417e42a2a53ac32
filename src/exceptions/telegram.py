"""Telegram Bot API related exceptions."""

from typing import Optional

from src.exceptions.base import TeamReportsError


class TelegramDeliveryError(TeamReportsError):
    """Sending a bot message failed."""

    def __init__(self, message: str, chat_id: Optional[int] = None):
        super().__init__(message)
        self.chat_id = chat_id
