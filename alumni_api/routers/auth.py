from __future__ import annotations

from fastapi import APIRouter, Depends

from alumni_api.routers.deps import current_user, get_services, unwrap
from alumni_api.routers.schemas import (
    ChangePasswordBody,
    EmailBody,
    LoginBody,
    RefreshTokenBody,
    RegistrationBody,
    ResetPasswordBody,
)
from alumni_api.services.registry import Services

router = APIRouter(prefix="/auth", tags=["auth"])


def _ack(result) -> dict:
    return {"message": unwrap(result).message}


@router.post("/registration")
def registration(body: RegistrationBody, services: Services = Depends(get_services)):
    result = services.auth.registration(body.email, body.password, body.name, body.surname, body.phone_number)
    return _ack(result)


@router.get("/activate/{link}")
def activate(link: str, services: Services = Depends(get_services)):
    return _ack(services.auth.activate(link))


@router.post("/login")
def login(body: LoginBody, services: Services = Depends(get_services)):
    session = unwrap(services.auth.login(body.email, body.password))
    return session.as_dict()


@router.post("/logout")
def logout(body: RefreshTokenBody, services: Services = Depends(get_services)):
    return _ack(services.auth.logout(body.refresh_token))


@router.post("/refresh")
def refresh(body: RefreshTokenBody, services: Services = Depends(get_services)):
    session = unwrap(services.auth.refresh(body.refresh_token))
    return session.as_dict()


@router.post("/change-password")
def change_password(
    body: ChangePasswordBody,
    user: dict = Depends(current_user),
    services: Services = Depends(get_services),
):
    result = services.auth.change_password(
        body.old_password, body.new_password, body.confirm_new_password, str(user.get("id") or "")
    )
    return _ack(result)


@router.post("/send-otp")
def send_otp(body: EmailBody, services: Services = Depends(get_services)):
    return _ack(services.auth.send_otp_code(body.email))


@router.post("/resend-otp")
def resend_otp(body: EmailBody, services: Services = Depends(get_services)):
    return _ack(services.auth.resend_otp_code(body.email))


@router.post("/reset-password")
def reset_password(body: ResetPasswordBody, services: Services = Depends(get_services)):
    result = services.auth.reset_password(body.email, body.code, body.new_password, body.confirm_new_password)
    return _ack(result)
