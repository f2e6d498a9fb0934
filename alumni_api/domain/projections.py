"""
Public projections of stored entities.

The user projection is also the payload signed into access/refresh tokens, so
it must stay JSON-serializable and never include the password hash,
activation link or reset code.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from alumni_api.db.models import News, User, Vacancy
from alumni_api.domain.images import ImageFolder, image_url


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def public_profile(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "surname": user.surname,
        "isAdmin": bool(user.is_admin),
        "education": user.education,
        "specialty": user.specialty,
        "yearOfRelease": user.year_of_release,
        "place": user.place,
        "phoneNumber": user.phone_number,
        "workPlace": user.work_place,
        "positionAtWork": user.position_at_work,
        "shortBiography": user.short_biography,
        "educationAndGoals": user.education_and_goals,
        "avatar": image_url(ImageFolder.AVATARS, user.avatar),
        "createdAt": _iso(user.created_at),
    }


def news_view(news: News) -> dict:
    return {
        "id": news.id,
        "title": news.title,
        "poster": image_url(ImageFolder.POSTERS, news.poster),
        "shortDescribe": news.short_describe,
        "content": list(news.content or []),
        "newsImages": [image_url(ImageFolder.NEWS_IMAGES, name) for name in (news.news_images or [])],
        "createdAt": _iso(news.created_at),
        "lastUpdate": _iso(news.last_update),
        "updatedBy": news.updated_by,
    }


def vacancy_view(vacancy: Vacancy) -> dict:
    return {
        "id": vacancy.id,
        "companyName": vacancy.company_name,
        "companyLogo": image_url(ImageFolder.COMPANY_LOGOS, vacancy.company_logo),
        "salary": vacancy.salary,
        "requirements": vacancy.requirements,
        "position": vacancy.position,
        "contacts": list(vacancy.contacts or []),
        "createdAt": _iso(vacancy.created_at),
        "lastUpdate": _iso(vacancy.last_update),
        "updatedBy": vacancy.updated_by,
    }
