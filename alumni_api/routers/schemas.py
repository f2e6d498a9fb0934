"""Request bodies accepted by the JSON endpoints (camelCase on the wire)."""
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from alumni_api.domain.otp import is_valid_otp

PASSWORD_MESSAGE = "Password must be min 3 length, max 32"
PASSWORD_EQUAL = "Password need to be equal"
OTP_MESSAGE = "Code must be 6 digits"


def _password(alias: str | None = None):
    return Field(min_length=3, max_length=32, alias=alias, description=PASSWORD_MESSAGE)


def _name(alias: str | None = None):
    return Field(min_length=2, max_length=32, alias=alias)


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegistrationBody(_Body):
    email: EmailStr
    password: str = _password()
    confirm_password: str = _password("confirmPassword")
    name: str = _name()
    surname: str = _name()
    phone_number: str = Field(min_length=1, max_length=32, alias="phoneNumber")

    @model_validator(mode="after")
    def _passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError(PASSWORD_EQUAL)
        return self


class LoginBody(_Body):
    email: EmailStr
    password: str


class RefreshTokenBody(_Body):
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")


class ChangePasswordBody(_Body):
    old_password: str = _password("oldPassword")
    new_password: str = _password("newPassword")
    confirm_new_password: str = _password("confirmNewPassword")


class EmailBody(_Body):
    email: EmailStr


class ResetPasswordBody(_Body):
    email: EmailStr
    code: Union[int, str]
    new_password: str = _password("newPassword")
    confirm_new_password: str = _password("confirmNewPassword")

    @field_validator("code")
    @classmethod
    def _six_digits(cls, value):
        if not is_valid_otp(value):
            raise ValueError(OTP_MESSAGE)
        return value
