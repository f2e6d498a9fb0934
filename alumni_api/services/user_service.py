"""Profile lookups, profile updates and the alumni directory listing."""

from __future__ import annotations

from typing import Any, Optional

import structlog

from alumni_api.core.errors import AuthErrorKind, AuthFailure
from alumni_api.domain import pagination
from alumni_api.domain.images import ImageFolder
from alumni_api.domain.projections import public_profile
from alumni_api.repositories.sql_repository import SQLRepository
from alumni_api.services.image_service import ImageService

logger = structlog.get_logger(__name__)

USER_UPDATED = "User successful updated"

# Columns a user may change on their own profile; email, password, id and created_at never are.
EDITABLE_FIELDS = (
    "name",
    "surname",
    "phone_number",
    "education",
    "specialty",
    "year_of_release",
    "place",
    "work_place",
    "position_at_work",
    "short_biography",
    "education_and_goals",
)


class UserService:
    def __init__(self, repository: SQLRepository, images: ImageService) -> None:
        self.repository = repository
        self.images = images

    def get_profile(self, email: str) -> dict | AuthFailure:
        user = self.repository.find_user_by_email(email)
        if user is None:
            return AuthFailure(AuthErrorKind.USER_NOT_FOUND)
        return public_profile(user)

    def get_user_by_id(self, user_id: str) -> dict | AuthFailure:
        user = self.repository.find_user_by_id(user_id)
        if user is None:
            return AuthFailure(AuthErrorKind.USER_NOT_FOUND)
        return public_profile(user)

    def update_profile(self, user_id: str, fields: dict[str, Any], avatar: Optional[str] = None) -> dict | AuthFailure:
        user = self.repository.find_user_by_id(user_id)
        if user is None:
            self.images.remove_image(ImageFolder.AVATARS, avatar)
            return AuthFailure(AuthErrorKind.USER_NOT_FOUND)
        old_avatar = user.avatar if avatar else None
        for key in EDITABLE_FIELDS:
            if key in fields and fields[key] is not None:
                setattr(user, key, fields[key])
        if avatar:
            user.avatar = avatar
        try:
            user = self.repository.save_user(user)
        except Exception:
            self.images.remove_image(ImageFolder.AVATARS, avatar)
            raise
        self.images.remove_image(ImageFolder.AVATARS, old_avatar)
        logger.info("profile_updated", user_id=user.id)
        return {"message": USER_UPDATED, "user": public_profile(user)}

    def get_users(self, page: int | None, limit: int | None, filters: dict | None = None) -> pagination.Page:
        page_number, per_page = pagination.normalize(page, limit)
        total, users = self.repository.list_users(
            offset=pagination.offset_for(page_number, per_page),
            limit=per_page,
            filters=filters,
        )
        return pagination.build_page(total, page_number, per_page, [public_profile(u) for u in users])
