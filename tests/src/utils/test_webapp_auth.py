"""Tests for Telegram WebApp initData validation."""

import json
import time
from urllib.parse import urlencode

import pytest
from unittest.mock import patch

from src.utils.webapp_auth import INIT_DATA_TTL, sign_fields, validate_init_data

BOT_TOKEN = "test-bot-token"

ANN = {
    "id": 42,
    "first_name": "Ann",
    "last_name": "Lee",
    "username": "ann",
    "photo_url": "https://t.me/i/userpic/320/ann.jpg",
}


def _init_data(user=ANN, auth_date=None, bot_token=BOT_TOKEN, signature=None, **extra):
    fields = {"auth_date": str(int(time.time()) if auth_date is None else auth_date)}
    if user is not None:
        fields["user"] = user if isinstance(user, str) else json.dumps(user)
    fields.update(extra)
    fields["hash"] = signature if signature is not None else sign_fields(fields, bot_token)
    return urlencode(fields)


@pytest.fixture(autouse=True)
def bot_token_setting():
    with patch("src.utils.webapp_auth.settings") as mock_settings:
        mock_settings.TELEGRAM_BOT_TOKEN = BOT_TOKEN
        yield mock_settings


@pytest.mark.unit
class TestSignFields:
    def test_signature_ignores_insertion_order(self):
        """Key order, not insertion order, decides the signed message."""
        a = sign_fields({"user": "{}", "auth_date": "1"}, BOT_TOKEN)
        b = sign_fields({"auth_date": "1", "user": "{}"}, BOT_TOKEN)

        assert a == b
        assert len(a) == 64

    def test_token_changes_signature(self):
        fields = {"auth_date": "1"}
        assert sign_fields(fields, "one") != sign_fields(fields, "two")


@pytest.mark.unit
class TestValidateInitData:
    """Test initData HMAC-SHA256 validation."""

    def test_valid_init_data_returns_profile(self):
        assert validate_init_data(_init_data()) == {
            "user_id": 42,
            "first_name": "Ann",
            "last_name": "Lee",
            "username": "ann",
            "photo_url": "https://t.me/i/userpic/320/ann.jpg",
        }

    def test_optional_profile_fields_default_to_none(self):
        result = validate_init_data(_init_data(user={"id": 7, "first_name": "Bo"}))

        assert result["user_id"] == 7
        assert result["username"] is None
        assert result["photo_url"] is None

    def test_explicit_bot_token(self):
        init_data = _init_data(bot_token="other-token")

        assert validate_init_data(init_data, bot_token="other-token")["user_id"] == 42

    def test_query_id_is_part_of_signed_data(self):
        init_data = _init_data(query_id="AAHdF6IQAAAAAN0XohDhrOrc")

        assert validate_init_data(init_data)["user_id"] == 42

    @pytest.mark.parametrize(
        "init_data, message",
        [
            ("", "Empty initData"),
            ("auth_date=1&user=%7B%7D", "Missing hash"),
        ],
    )
    def test_unsigned_input_rejected(self, init_data, message):
        with pytest.raises(ValueError, match=message):
            validate_init_data(init_data)

    def test_tampered_hash_rejected(self):
        with pytest.raises(ValueError, match="Invalid initData signature"):
            validate_init_data(_init_data(signature="a" * 64))

    def test_other_bots_token_rejected(self, bot_token_setting):
        bot_token_setting.TELEGRAM_BOT_TOKEN = "wrong-token"

        with pytest.raises(ValueError, match="Invalid initData signature"):
            validate_init_data(_init_data())

    def test_edited_user_rejected(self):
        init_data = _init_data().replace("Ann", "Eve")

        with pytest.raises(ValueError, match="Invalid initData signature"):
            validate_init_data(init_data)

    def test_expired(self):
        stale = int(time.time()) - INIT_DATA_TTL - 60

        with pytest.raises(ValueError, match="initData expired"):
            validate_init_data(_init_data(auth_date=stale))

    def test_custom_max_age(self):
        ten_minutes_ago = int(time.time()) - 600

        assert validate_init_data(_init_data(auth_date=ten_minutes_ago))["user_id"] == 42
        with pytest.raises(ValueError, match="initData expired"):
            validate_init_data(_init_data(auth_date=ten_minutes_ago), max_age=300)

    def test_non_numeric_auth_date(self):
        with pytest.raises(ValueError, match="Invalid auth_date"):
            validate_init_data(_init_data(auth_date="soon"))

    def test_missing_user(self):
        with pytest.raises(ValueError, match="Missing user"):
            validate_init_data(_init_data(user=None))

    def test_user_without_id(self):
        with pytest.raises(ValueError, match="Missing user"):
            validate_init_data(_init_data(user={"first_name": "Ann"}))

    def test_malformed_user_json(self):
        with pytest.raises(ValueError, match="Malformed user"):
            validate_init_data(_init_data(user="{not json"))
