"""Security helpers (hashing and verification)."""

from __future__ import annotations

from argon2 import PasswordHasher, exceptions as argon_exc


class PasswordHashing:
    """Argon2 password hashing with a configurable time cost."""

    def __init__(self, time_cost: int | None = None) -> None:
        self._ph = PasswordHasher(time_cost=time_cost) if time_cost else PasswordHasher()

    def hash(self, password: str) -> str:
        return self._ph.hash(password)

    def verify(self, password: str, stored_hash: str | None) -> bool:
        if not stored_hash:
            return False
        try:
            return self._ph.verify(stored_hash, password)
        except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
            return False
