"""
Authentication and identity related use cases.

Every public operation returns either a success value or an `AuthFailure`;
routers map the failure kind to a status code. Infrastructure errors (store
outage, SMTP failure) are not caught here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import uuid

import structlog

from alumni_api.core.config import Settings
from alumni_api.core.errors import AuthErrorKind, AuthFailure, DuplicateEmailError
from alumni_api.core.mailer import Mailer
from alumni_api.core.security import PasswordHashing
from alumni_api.core.utils import api_url
from alumni_api.db.models import User
from alumni_api.domain.otp import generate_otp
from alumni_api.domain.projections import public_profile
from alumni_api.repositories.sql_repository import SQLRepository
from alumni_api.services.token_service import TokenService

logger = structlog.get_logger(__name__)

REGISTERED = "User successful registered"
ACTIVATED = "Successful activated"
LOGGED_OUT = "You successful logout"
PASSWORD_CHANGED = "Password successful changed"
PASSWORD_RECOVERED = "Password successful recovered"
OTP_SENT = "Code successful sent"
OTP_RESENT = "Code successful resent"


@dataclass(frozen=True)
class Acknowledgement:
    message: str


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    refresh_token: str
    user: dict

    def as_dict(self) -> dict:
        return {"accessToken": self.access_token, "refreshToken": self.refresh_token, "user": self.user}


def _fail(kind: AuthErrorKind) -> AuthFailure:
    return AuthFailure(kind)


def _coerce_code(code: int | str | None) -> Optional[int]:
    text = str(code if code is not None else "").strip()
    if not text.isdigit():
        return None
    return int(text)


@dataclass
class AuthService:
    """Handles registration, activation, login/logout/refresh, password change and OTP recovery."""

    repository: SQLRepository
    tokens: TokenService
    mailer: Mailer
    hasher: PasswordHashing
    settings: Settings

    # -------------------------------------- helpers --------------------------------------
    def _activation_url(self, activation_link: str) -> str:
        return api_url("auth", "activate", activation_link, base=self.settings.api_url)

    def _issue_session(self, user: User) -> AuthSession:
        profile = public_profile(user)
        pair = self.tokens.generate_token_pair(profile)
        self.tokens.persist_refresh_token(user.id, pair.refresh_token)
        return AuthSession(access_token=pair.access_token, refresh_token=pair.refresh_token, user=profile)

    def _send_new_otp(self, user: User) -> None:
        code = generate_otp()
        self.mailer.send_otp_code(user.email, code)
        user.reset_code = code
        self.repository.save_user(user)

    # -------------------------------------- registration --------------------------------------
    def registration(
        self, email: str, password: str, name: str, surname: str, phone_number: str
    ) -> Acknowledgement | AuthFailure:
        if self.repository.find_user_by_email(email) is not None:
            return _fail(AuthErrorKind.USER_EXISTS)
        activation_link = str(uuid.uuid4())
        try:
            user = self.repository.create_user(
                email=email,
                password_hash=self.hasher.hash(password),
                name=name,
                surname=surname,
                phone_number=phone_number or "",
                activation_link=activation_link,
            )
        except DuplicateEmailError:
            return _fail(AuthErrorKind.USER_EXISTS)
        self.mailer.send_activation_mail(email, self._activation_url(activation_link))
        # Tokens are issued and persisted even before activation; the response only acknowledges.
        self._issue_session(user)
        logger.info("user_registered", user_id=user.id)
        return Acknowledgement(REGISTERED)

    def activate(self, activation_link: str) -> Acknowledgement | AuthFailure:
        user = self.repository.find_user_by_activation_link((activation_link or "").strip())
        if user is None:
            return _fail(AuthErrorKind.INVALID_ACTIVATION_LINK)
        user.is_activated = True
        self.repository.save_user(user)
        logger.info("user_activated", user_id=user.id)
        return Acknowledgement(ACTIVATED)

    # -------------------------------------- sessions --------------------------------------
    def login(self, email: str, password: str) -> AuthSession | AuthFailure:
        user = self.repository.find_user_by_email(email)
        if user is None:
            return _fail(AuthErrorKind.USER_NOT_FOUND)
        if not user.is_activated:
            return _fail(AuthErrorKind.EMAIL_NOT_ACTIVATED)
        if not self.hasher.verify(password, user.password_hash):
            return _fail(AuthErrorKind.INCORRECT_PASSWORD)
        session = self._issue_session(user)
        logger.info("user_logged_in", user_id=user.id)
        return session

    def logout(self, refresh_token: Optional[str]) -> Acknowledgement | AuthFailure:
        if not refresh_token:
            return _fail(AuthErrorKind.UNAUTHORIZED)
        if self.tokens.lookup_refresh_token(refresh_token) is None:
            return _fail(AuthErrorKind.UNAUTHORIZED)
        self.tokens.delete_refresh_token(refresh_token)
        return Acknowledgement(LOGGED_OUT)

    def refresh(self, refresh_token: Optional[str]) -> AuthSession | AuthFailure:
        if not refresh_token:
            return _fail(AuthErrorKind.UNAUTHORIZED)
        claims = self.tokens.verify_refresh_token(refresh_token)
        if claims is None or self.tokens.lookup_refresh_token(refresh_token) is None:
            return _fail(AuthErrorKind.UNAUTHORIZED)
        user = self.repository.find_user_by_id(str(claims.get("id") or ""))
        if user is None:
            return _fail(AuthErrorKind.UNAUTHORIZED)
        return self._issue_session(user)

    # -------------------------------------- passwords --------------------------------------
    def change_password(
        self, old_password: str, new_password: str, confirm_new_password: str, user_id: str
    ) -> Acknowledgement | AuthFailure:
        user = self.repository.find_user_by_id(user_id)
        if user is None:
            return _fail(AuthErrorKind.USER_NOT_FOUND)
        if not self.hasher.verify(old_password, user.password_hash):
            return _fail(AuthErrorKind.INCORRECT_PASSWORD)
        if new_password != confirm_new_password:
            return _fail(AuthErrorKind.PASSWORD_MISMATCH)
        user.password_hash = self.hasher.hash(new_password)
        self.repository.save_user(user)
        logger.info("password_changed", user_id=user.id)
        return Acknowledgement(PASSWORD_CHANGED)

    # -------------------------------------- otp recovery --------------------------------------
    def send_otp_code(self, email: str) -> Acknowledgement | AuthFailure:
        user = self.repository.find_user_by_email(email)
        if user is None:
            return _fail(AuthErrorKind.USER_NOT_FOUND)
        self._send_new_otp(user)
        logger.info("otp_sent", user_id=user.id)
        return Acknowledgement(OTP_SENT)

    def resend_otp_code(self, email: str) -> Acknowledgement | AuthFailure:
        user = self.repository.find_user_by_email(email)
        if user is None:
            return _fail(AuthErrorKind.USER_NOT_FOUND)
        if user.reset_code is None:
            return _fail(AuthErrorKind.NO_PENDING_OTP)
        self._send_new_otp(user)
        logger.info("otp_resent", user_id=user.id)
        return Acknowledgement(OTP_RESENT)

    def reset_password(
        self, email: str, code: int | str, new_password: str, confirm_new_password: str
    ) -> Acknowledgement | AuthFailure:
        user = self.repository.find_user_by_email(email)
        if user is None:
            return _fail(AuthErrorKind.USER_NOT_FOUND)
        if user.reset_code is None:
            return _fail(AuthErrorKind.NO_PENDING_OTP)
        if _coerce_code(code) != user.reset_code:
            return _fail(AuthErrorKind.OTP_INCORRECT)
        if new_password != confirm_new_password:
            return _fail(AuthErrorKind.PASSWORD_MISMATCH)
        user.password_hash = self.hasher.hash(new_password)
        user.reset_code = None
        self.repository.save_user(user)
        logger.info("password_recovered", user_id=user.id)
        return Acknowledgement(PASSWORD_RECOVERED)
