"""Telegram bot webhook endpoint."""

import hmac
import json
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from src.api.dependencies import get_db
from src.config.settings import settings
from src.services.core.telegram_bot import TelegramBotService
from src.utils.logger import logger

router = APIRouter(tags=["webhook"])


@router.post("/webhook")
async def telegram_webhook(
    request: Request,
    db: Session = Depends(get_db),
    secret_token: Optional[str] = Header(
        default=None, alias="X-Telegram-Bot-Api-Secret-Token"
    ),
):
    """Receive a bot update.

    Always answers {"ok": true} once the body parses, so Telegram does not
    redeliver updates whose handling failed.
    """
    expected = settings.TELEGRAM_WEBHOOK_SECRET
    if expected and not hmac.compare_digest(secret_token or "", expected):
        logger.warning("Rejected webhook call with a bad secret token")
        raise HTTPException(status_code=401, detail="Invalid secret token")

    try:
        payload = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Webhook error: unreadable update body: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
    if not isinstance(payload, dict):
        logger.error("Webhook error: update body is not a JSON object")
        raise HTTPException(status_code=500, detail="Internal server error")

    await TelegramBotService(db).handle_update(payload)
    return {"ok": True}
