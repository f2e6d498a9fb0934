"""Shared router dependencies: service lookup, bearer authentication, admin check."""
from __future__ import annotations

from fastapi import Depends, Request

from alumni_api.core.errors import PERMISSION_DENIED, ApiError, AuthFailure, ContentFailure
from alumni_api.services.registry import Services


def get_services(request: Request) -> Services:
    svc = getattr(getattr(request.app, "state", None), "services", None)
    if not svc:
        raise RuntimeError("Services are not configured on app.state")
    return svc


def unwrap(result):
    """Return a service result, raising ApiError when it is a failure value."""
    if isinstance(result, (AuthFailure, ContentFailure)):
        raise ApiError.from_failure(result)
    return result


def current_user(request: Request, services: Services = Depends(get_services)) -> dict:
    """Profile snapshot carried by a valid `Authorization: Bearer <access token>` header."""
    header = request.headers.get("authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise ApiError.unauthorized()
    profile = services.tokens.verify_access_token(token.strip())
    if profile is None:
        raise ApiError.unauthorized()
    return profile


def require_admin(user: dict = Depends(current_user)) -> dict:
    if not user.get("isAdmin"):
        raise ApiError(403, PERMISSION_DENIED)
    return user
