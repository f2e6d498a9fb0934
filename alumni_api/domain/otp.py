"""One-time password helpers for the password recovery flow."""
from __future__ import annotations

import secrets

OTP_MIN = 100000
OTP_MAX = 999999


def generate_otp() -> int:
    """Return a uniformly random 6-digit code (no leading zeros)."""
    return OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1)


def is_valid_otp(value: int | str | None) -> bool:
    text = str(value if value is not None else "").strip()
    return len(text) == 6 and text.isdigit()
