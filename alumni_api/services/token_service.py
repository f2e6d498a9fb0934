"""Signing/verification of access and refresh tokens plus refresh-token persistence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
import structlog

from alumni_api.core.config import Settings
from alumni_api.db.models import RefreshToken
from alumni_api.repositories.sql_repository import SQLRepository

logger = structlog.get_logger(__name__)

JWT_ALGORITHM = "HS256"
_REGISTERED_CLAIMS = ("exp", "iat")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    """
    Issues access/refresh JWTs and keeps the single live refresh token per user.

    Signature checks are stateless; `lookup_refresh_token` is the stateful half
    that tells whether a refresh token was rotated out or logged out.
    """

    def __init__(
        self,
        repository: SQLRepository,
        *,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = timedelta(minutes=30),
        refresh_ttl: timedelta = timedelta(days=30),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("JWT access and refresh secrets must be configured.")
        if access_secret == refresh_secret:
            raise ValueError("JWT access and refresh secrets must differ.")
        self.repository = repository
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, repository: SQLRepository, settings: Settings) -> "TokenService":
        return cls(
            repository,
            access_secret=settings.jwt_access_secret,
            refresh_secret=settings.jwt_refresh_secret,
            access_ttl=timedelta(seconds=settings.access_token_ttl_seconds),
            refresh_ttl=timedelta(seconds=settings.refresh_token_ttl_seconds),
        )

    # -------------------------------------- signing --------------------------------------
    def _sign(self, profile: dict, secret: str, ttl: timedelta) -> str:
        now = self._clock()
        # NumericDate with microseconds, so pairs issued within one second still differ.
        payload = {**profile, "iat": now.timestamp(), "exp": (now + ttl).timestamp()}
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)

    def _verify(self, token: Optional[str], secret: str) -> Optional[dict]:
        if not token:
            return None
        try:
            payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        except jwt.InvalidTokenError:
            return None
        return {key: value for key, value in payload.items() if key not in _REGISTERED_CLAIMS}

    def generate_token_pair(self, profile: dict) -> TokenPair:
        return TokenPair(
            access_token=self._sign(profile, self._access_secret, self.access_ttl),
            refresh_token=self._sign(profile, self._refresh_secret, self.refresh_ttl),
        )

    def verify_access_token(self, token: Optional[str]) -> Optional[dict]:
        """Return the signed profile, or None for any malformed/expired/foreign token."""
        return self._verify(token, self._access_secret)

    def verify_refresh_token(self, token: Optional[str]) -> Optional[dict]:
        return self._verify(token, self._refresh_secret)

    # -------------------------------------- persistence --------------------------------------
    def persist_refresh_token(self, user_id: str, token: str) -> RefreshToken:
        record = self.repository.upsert_refresh_token(user_id, token)
        logger.debug("refresh_token_persisted", user_id=user_id)
        return record

    def lookup_refresh_token(self, token: Optional[str]) -> Optional[RefreshToken]:
        if not token:
            return None
        return self.repository.find_refresh_token(token)

    def delete_refresh_token(self, token: str) -> None:
        self.repository.delete_refresh_token(token)
        logger.info("refresh_token_deleted")
