from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from alumni_api.domain import pagination
from alumni_api.domain.images import ImageFolder
from alumni_api.routers.deps import current_user, get_services, unwrap
from alumni_api.services.registry import Services

router = APIRouter(tags=["users"])

MIN_YEAR = 1900
MAX_YEAR = 2100


@router.get("/users")
def get_users(
    page: int = Query(pagination.DEFAULT_PAGE, ge=1, le=pagination.MAX_PAGE),
    limit: int = Query(pagination.DEFAULT_LIMIT, ge=1, le=pagination.MAX_LIMIT),
    name: Optional[str] = None,
    year_of_release: Optional[int] = Query(None, alias="yearOfRelease", ge=MIN_YEAR, le=MAX_YEAR),
    education: Optional[str] = None,
    specialty: Optional[str] = None,
    services: Services = Depends(get_services),
):
    filters = {
        "name": name,
        "year_of_release": year_of_release,
        "education": education,
        "specialty": specialty,
    }
    return services.users.get_users(page, limit, filters).as_dict()


@router.get("/user/profile")
def get_profile(user: dict = Depends(current_user), services: Services = Depends(get_services)):
    return unwrap(services.users.get_profile(str(user.get("email") or "")))


@router.patch("/user/update-profile")
def update_profile(
    name: Optional[str] = Form(None, min_length=2, max_length=32),
    surname: Optional[str] = Form(None, min_length=2, max_length=32),
    phone_number: Optional[str] = Form(None, alias="phoneNumber"),
    education: Optional[str] = Form(None),
    specialty: Optional[str] = Form(None),
    year_of_release: Optional[int] = Form(None, alias="yearOfRelease", ge=MIN_YEAR, le=MAX_YEAR),
    place: Optional[str] = Form(None),
    work_place: Optional[str] = Form(None, alias="workPlace"),
    position_at_work: Optional[str] = Form(None, alias="positionAtWork"),
    short_biography: Optional[str] = Form(None, alias="shortBiography"),
    education_and_goals: Optional[str] = Form(None, alias="educationAndGoals"),
    avatars: Optional[UploadFile] = File(None),
    user: dict = Depends(current_user),
    services: Services = Depends(get_services),
):
    fields = {
        "name": name,
        "surname": surname,
        "phone_number": phone_number,
        "education": education,
        "specialty": specialty,
        "year_of_release": year_of_release,
        "place": place,
        "work_place": work_place,
        "position_at_work": position_at_work,
        "short_biography": short_biography,
        "education_and_goals": education_and_goals,
    }
    avatar = services.images.save_optional(ImageFolder.AVATARS, avatars)
    return unwrap(services.users.update_profile(str(user.get("id") or ""), fields, avatar))


@router.get("/user/{user_id}")
def get_user_by_id(user_id: str, _user: dict = Depends(current_user), services: Services = Depends(get_services)):
    return unwrap(services.users.get_user_by_id(user_id))
