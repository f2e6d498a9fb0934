from __future__ import annotations

import json
import smtplib

import pytest
import structlog

from alumni_api.core import config as core_config
from alumni_api.core.errors import ApiError, AuthErrorKind, AuthFailure, ContentErrorKind, ContentFailure
from alumni_api.core.log import configure_logging, redact_sensitive
from alumni_api.core.mailer import SMTPMailer
from alumni_api.core.security import PasswordHashing
from alumni_api.core.utils import api_url


@pytest.fixture()
def fresh_settings(monkeypatch):
    core_config.get_settings.cache_clear()
    yield monkeypatch
    core_config.get_settings.cache_clear()


def test_settings_read_environment(fresh_settings):
    fresh_settings.setenv("API_URL", "https://alumni.example.org/")
    fresh_settings.setenv("ACCESS_TOKEN_TTL_SECONDS", "not-a-number")
    fresh_settings.setenv("PASSWORD_HASH_TIME_COST", "-4")
    fresh_settings.setenv("APP_ENV", "PROD")

    settings = core_config.get_settings()
    assert settings.api_url == "https://alumni.example.org"
    assert settings.access_token_ttl_seconds == 1800
    assert settings.password_hash_time_cost == 0
    assert settings.app_env == "prod"


def test_api_url():
    assert api_url("auth", "activate", "abc", base="http://h/") == "http://h/api/auth/activate/abc"
    assert api_url(base="http://h") == "http://h/api"
    assert api_url("images", "avatars", "../x y.png", base="http://h") == "http://h/api/images/avatars/..%2Fx%20y.png"


def test_redact_sensitive_hides_credentials():
    event = {
        "event": "password_changed",
        "password": "abc",
        "refresh_token": "t",
        "reset_code": 123456,
        "user_id": "u1",
        "to": "alice@x.com",
        "activation_link": "abc-123",
    }
    out = redact_sensitive(None, "info", event)
    assert out["to"] == "a***@x.com"
    assert out["activation_link"] == "REDACTED"
    assert out["event"] == "password_changed"
    assert out["password"] == "REDACTED"
    assert out["refresh_token"] == "REDACTED"
    assert out["reset_code"] == "REDACTED"
    assert out["user_id"] == "u1"


def test_failure_status_mapping():
    unauthorized = ApiError.from_failure(AuthFailure(AuthErrorKind.UNAUTHORIZED))
    assert unauthorized.status_code == 401
    assert unauthorized.message == "User not authorized"

    missing = ApiError.from_failure(ContentFailure(ContentErrorKind.NEWS_NOT_FOUND))
    assert missing.status_code == 400
    assert missing.errors == []


def test_password_hashing_round_trip():
    hasher = PasswordHashing(1)
    stored = hasher.hash("abc123")
    assert stored != "abc123"
    assert hasher.verify("abc123", stored) is True
    assert hasher.verify("wrong", stored) is False
    assert hasher.verify("abc123", "") is False
    assert hasher.verify("abc123", "not-a-hash") is False


def test_mailer_skips_when_smtp_is_not_configured(fresh_settings):
    fresh_settings.delenv("SMTP_HOST", raising=False)
    mailer = SMTPMailer(core_config.get_settings())
    assert mailer.send_email("s", "a@x.com", "<p>hi</p>") is False


def test_mailer_propagates_transport_errors(fresh_settings):
    fresh_settings.setenv("SMTP_HOST", "smtp.invalid")
    fresh_settings.setenv("SMTP_PORT", "587")
    fresh_settings.setenv("SMTP_USER", "bot")
    fresh_settings.setenv("SMTP_PASSWORD", "pw")

    class _Boom:
        def __init__(self, *args, **kwargs):
            raise smtplib.SMTPConnectError(421, "down")

    fresh_settings.setattr(smtplib, "SMTP", _Boom)
    with pytest.raises(smtplib.SMTPConnectError):
        SMTPMailer(core_config.get_settings()).send_otp_code("a@x.com", 123456)


def test_json_logging_masks_recipient(capsys):
    configure_logging("INFO", app_env="prod")
    structlog.get_logger("alumni_api.tests").info("email_sent", to="bob@x.com", code=123456)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "email_sent"
    assert record["to"] == "b***@x.com"
    assert record["code"] == "REDACTED"
