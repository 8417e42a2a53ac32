"""Telegram bot service - webhook updates and Mini App entry buttons."""

from typing import Optional

from sqlalchemy.orm import Session
from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, Update, WebAppInfo
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.request import HTTPXRequest

from src.config.settings import settings
from src.exceptions import TelegramDeliveryError
from src.services.base_service import BaseService
from src.services.core.identity_service import IdentityService
from src.utils.logger import logger

ERROR_REPLY = "Sorry, something went wrong. Please try again later."

ADMIN_WELCOME = (
    "Welcome, Admin! 👋\n\n"
    "Access your admin dashboard to manage teams and view reports."
)
EMPLOYEE_WELCOME = "Welcome! 👋\n\nClick the button below to submit your daily report."
HELP_TEXT = (
    "<b>Team Reports</b>\n\n"
    "/start - Open the report form (or the admin dashboard)\n"
    "/help - Show this message"
)


class TelegramBotService(BaseService):
    """
    Handles bot updates delivered to the webhook.

    Only slash commands from private messages are answered; everything
    else is acknowledged and ignored. Handler failures never propagate:
    the sender gets an apology and the webhook still acknowledges.
    """

    def __init__(self, db: Optional[Session] = None, bot: Optional[Bot] = None):
        super().__init__()
        self.db = db
        self._bot = bot
        self.identity_service = IdentityService(db)
        self._commands = {
            "/start": self.handle_start,
            "/help": self.handle_help,
        }

    async def _get_bot(self) -> Bot:
        """Lazy-initialize the Bot with bounded HTTP timeouts."""
        if self._bot is None:
            timeout = settings.TELEGRAM_TIMEOUT_SECONDS
            request = HTTPXRequest(
                connect_timeout=timeout,
                read_timeout=timeout,
                write_timeout=timeout,
                pool_timeout=timeout,
            )
            self._bot = Bot(token=settings.TELEGRAM_BOT_TOKEN, request=request)
            await self._bot.initialize()
        return self._bot

    @staticmethod
    def parse_command(text: Optional[str]) -> Optional[str]:
        """'/start@MyBot payload' -> '/start'; None for non-commands."""
        if not text or not text.startswith("/"):
            return None
        return text.split()[0].split("@")[0].lower()

    async def handle_update(self, payload: dict) -> bool:
        """
        Dispatch one webhook update.

        Args:
            payload: Raw update JSON as posted by Telegram

        Returns:
            True if a command handler ran
        """
        try:
            update = Update.de_json(payload, None)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed update: {e}")
            return False

        message = update.effective_message if update else None
        if message is None or update.effective_user is None:
            return False

        command = self.parse_command(message.text)
        handler = self._commands.get(command) if command else None
        if handler is None:
            return False

        chat_id = update.effective_chat.id
        logger.info(
            f"Handling {command} from user {update.effective_user.id} in chat {chat_id}"
        )
        try:
            await handler(update)
        except Exception as e:
            logger.error(f"Error handling {command} for chat {chat_id}: {e}", exc_info=True)
            try:
                await self.send_message(chat_id, ERROR_REPLY)
            except TelegramDeliveryError as delivery_error:
                logger.error(f"Could not deliver error reply: {delivery_error}")
        return True

    async def handle_start(self, update: Update):
        """Resolve the sender and reply with the matching Mini App button."""
        sender = update.effective_user
        identity = self.identity_service.resolve(
            telegram_id=sender.id,
            first_name=sender.first_name,
            last_name=sender.last_name,
            username=sender.username,
        )

        if identity.is_admin:
            text = ADMIN_WELCOME
            button = InlineKeyboardButton(
                "📊 Admin Dashboard",
                web_app=WebAppInfo(url=f"{settings.webapp_url}?admin=true"),
            )
        else:
            text = EMPLOYEE_WELCOME
            button = InlineKeyboardButton(
                "📝 Submit Report",
                web_app=WebAppInfo(url=settings.webapp_url),
            )

        await self.send_message(
            update.effective_chat.id,
            text,
            reply_markup=InlineKeyboardMarkup([[button]]),
        )

    async def handle_help(self, update: Update):
        await self.send_message(update.effective_chat.id, HELP_TEXT)

    async def send_message(
        self,
        chat_id: int,
        text: str,
        reply_markup: Optional[InlineKeyboardMarkup] = None,
    ):
        """
        Send an HTML-formatted message.

        Raises:
            TelegramDeliveryError: If the Bot API call fails
        """
        bot = await self._get_bot()
        try:
            await bot.send_message(
                chat_id=chat_id,
                text=text,
                reply_markup=reply_markup,
                parse_mode=ParseMode.HTML,
            )
        except TelegramError as e:
            raise TelegramDeliveryError(f"Failed to send message: {e}", chat_id=chat_id)

    async def set_webhook(self, url: str) -> bool:
        """Register the webhook URL (with the secret token when configured)."""
        bot = await self._get_bot()
        return await bot.set_webhook(
            url=url, secret_token=settings.TELEGRAM_WEBHOOK_SECRET
        )
