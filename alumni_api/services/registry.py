"""Bundle of the service objects one application instance works with."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from alumni_api.core.config import Settings
from alumni_api.core.mailer import Mailer, SMTPMailer
from alumni_api.core.security import PasswordHashing
from alumni_api.repositories.sql_repository import SQLRepository
from alumni_api.services.auth_service import AuthService
from alumni_api.services.image_service import ImageService
from alumni_api.services.news_service import NewsService
from alumni_api.services.token_service import TokenService
from alumni_api.services.user_service import UserService
from alumni_api.services.vacancy_service import VacancyService


@dataclass
class Services:
    auth: AuthService
    tokens: TokenService
    users: UserService
    news: NewsService
    vacancies: VacancyService
    images: ImageService


def build_services(
    settings: Settings,
    *,
    repository: Optional[SQLRepository] = None,
    mailer: Optional[Mailer] = None,
    tokens: Optional[TokenService] = None,
) -> Services:
    repository = repository or SQLRepository()
    tokens = tokens or TokenService.from_settings(repository, settings)
    images = ImageService(settings.images_dir)
    auth = AuthService(
        repository=repository,
        tokens=tokens,
        mailer=mailer or SMTPMailer(settings),
        hasher=PasswordHashing(settings.password_hash_time_cost or None),
        settings=settings,
    )
    return Services(
        auth=auth,
        tokens=tokens,
        users=UserService(repository, images),
        news=NewsService(repository, images),
        vacancies=VacancyService(repository, images),
        images=images,
    )
