"""Domain error catalogue and the HTTP-facing ApiError."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AuthErrorKind(str, Enum):
    """Failure kinds returned by account/session use cases. Values are the public messages."""

    USER_EXISTS = "User already exist"
    INVALID_ACTIVATION_LINK = "Invalid activation link"
    USER_NOT_FOUND = "User not found"
    EMAIL_NOT_ACTIVATED = "Email is not activated"
    INCORRECT_PASSWORD = "Incorrect password"
    PASSWORD_MISMATCH = "New password and confirm new password are not equal"
    OTP_INCORRECT = "Otp code are not correct"
    NO_PENDING_OTP = "You did not send opt code, please send firstly"
    UNAUTHORIZED = "User not authorized"


class ContentErrorKind(str, Enum):
    NEWS_NOT_FOUND = "News not found"
    VACANCY_NOT_FOUND = "Vacancy not found"
    POSTER_REQUIRED = "Poster required"
    LOGO_REQUIRED = "Logo required"


@dataclass(frozen=True)
class AuthFailure:
    kind: AuthErrorKind

    @property
    def message(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class ContentFailure:
    kind: ContentErrorKind

    @property
    def message(self) -> str:
        return self.kind.value


class DuplicateEmailError(Exception):
    """Raised by the credential store when the e-mail is already registered."""

    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")
        self.email = email


VALIDATION_ERROR = "Validation error"
UNEXPECTED_ERROR = "Unexpected error"
PERMISSION_DENIED = "You are not a admin"

# Status codes chosen by the HTTP boundary for each failure kind.
STATUS_BY_KIND: dict[Enum, int] = {kind: 400 for kind in (*AuthErrorKind, *ContentErrorKind)}
STATUS_BY_KIND[AuthErrorKind.UNAUTHORIZED] = 401


class ApiError(Exception):
    """Error rendered by the application's exception handler as {message, errors}."""

    def __init__(self, status_code: int, message: str, errors: list[Any] | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []

    @classmethod
    def from_failure(cls, failure: AuthFailure | ContentFailure) -> "ApiError":
        return cls(STATUS_BY_KIND.get(failure.kind, 400), failure.message)

    @classmethod
    def unauthorized(cls) -> "ApiError":
        return cls(401, AuthErrorKind.UNAUTHORIZED.value)

    @classmethod
    def bad_request(cls, message: str, errors: list[Any] | None = None) -> "ApiError":
        return cls(400, message, errors)
