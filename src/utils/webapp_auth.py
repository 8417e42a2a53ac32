"""Telegram WebApp initData signature checks.

Telegram signs the WebApp launch parameters with HMAC-SHA256. The key is
itself HMAC-SHA256("WebAppData", bot_token), and the signed message is every
field except ``hash``, formatted as ``key=value`` and joined by newlines in
key order.
"""

import hashlib
import hmac
import json
import time
from typing import Mapping, Optional
from urllib.parse import parse_qsl

from src.config.settings import settings

INIT_DATA_TTL = 3600  # seconds

PROFILE_FIELDS = ("first_name", "last_name", "username", "photo_url")


def sign_fields(fields: Mapping[str, str], bot_token: str) -> str:
    """Hex signature Telegram would attach to these initData fields."""
    check_string = "\n".join(f"{key}={fields[key]}" for key in sorted(fields))
    secret = hmac.new(b"WebAppData", bot_token.encode(), hashlib.sha256).digest()
    return hmac.new(secret, check_string.encode(), hashlib.sha256).hexdigest()


def validate_init_data(
    init_data: str,
    bot_token: Optional[str] = None,
    max_age: int = INIT_DATA_TTL,
) -> dict:
    """Verify a WebApp initData string and return the signed-in user's profile.

    Args:
        init_data: Raw Telegram.WebApp.initData query string
        bot_token: Token the data was signed for (defaults to TELEGRAM_BOT_TOKEN)
        max_age: Oldest acceptable auth_date, in seconds

    Returns:
        dict with user_id, first_name, last_name, username, photo_url

    Raises:
        ValueError: On a missing or wrong signature, stale auth_date, or no user
    """
    if not init_data:
        raise ValueError("Empty initData")

    fields = dict(parse_qsl(init_data, keep_blank_values=True))
    received_hash = fields.pop("hash", "")
    if not received_hash:
        raise ValueError("Missing hash in initData")

    expected_hash = sign_fields(fields, bot_token or settings.TELEGRAM_BOT_TOKEN)
    if not hmac.compare_digest(expected_hash, received_hash):
        raise ValueError("Invalid initData signature")

    try:
        auth_date = int(fields.get("auth_date", 0))
    except ValueError:
        raise ValueError("Invalid auth_date in initData")
    if time.time() - auth_date > max_age:
        raise ValueError("initData expired")

    try:
        user = json.loads(fields.get("user") or "{}")
    except json.JSONDecodeError:
        raise ValueError("Malformed user in initData")
    if not isinstance(user, dict) or not user.get("id"):
        raise ValueError("Missing user in initData")

    profile = {"user_id": user["id"]}
    profile.update({name: user.get(name) for name in PROFILE_FIELDS})
    return profile
