from __future__ import annotations

from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from alumni_api.core.config import Settings, get_settings
from alumni_api.core.errors import UNEXPECTED_ERROR, VALIDATION_ERROR, ApiError
from alumni_api.core.log import configure_logging
from alumni_api.core.utils import API_PREFIX
from alumni_api.routers import auth as auth_router
from alumni_api.routers import images as images_router
from alumni_api.routers import news as news_router
from alumni_api.routers import users as users_router
from alumni_api.routers import vacancies as vacancies_router
from alumni_api.services.registry import Services, build_services

logger = structlog.get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds frame, sniffing and referrer headers to every response; HSTS only in prod."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _error_body(message: str, errors: list | None = None) -> dict:
    return {"message": message, "errors": errors or []}


async def _api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(_error_body(exc.message, jsonable_encoder(exc.errors)), status_code=exc.status_code)


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(_error_body(VALIDATION_ERROR, jsonable_encoder(exc.errors())), status_code=400)


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(_error_body(str(exc.detail)), status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def _unexpected_error_handler(request: Request, exc: Exception):
    logger.error("unhandled_error", path=request.url.path, exc_info=exc)
    return JSONResponse(_error_body(UNEXPECTED_ERROR), status_code=500)


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """Build the FastAPI application; tests pass their own settings/services."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, app_env=settings.app_env)

    app = FastAPI(title="Alumni Portal API")
    app.state.settings = settings
    app.state.services = services or build_services(settings)

    allowed_cors = {settings.api_url}
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            }
        )
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(auth_router.router, prefix=API_PREFIX)
    app.include_router(users_router.router, prefix=API_PREFIX)
    app.include_router(news_router.router, prefix=API_PREFIX)
    app.include_router(vacancies_router.router, prefix=API_PREFIX)
    app.include_router(images_router.router, prefix=API_PREFIX)

    logger.info("app_created", app_env=settings.app_env)
    return app
