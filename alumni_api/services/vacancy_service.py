"""Job vacancies: listing, lookup and admin CRUD with a company logo."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from alumni_api.core.errors import ContentErrorKind, ContentFailure
from alumni_api.domain import pagination
from alumni_api.domain.images import ImageFolder
from alumni_api.domain.projections import vacancy_view
from alumni_api.repositories.sql_repository import SQLRepository
from alumni_api.services.image_service import ImageService

logger = structlog.get_logger(__name__)

VACANCY_CREATED = "Vacancy successful created"
VACANCY_UPDATED = "Vacancy successful updated"
VACANCY_DELETED = "Vacancy successful deleted"

EDITABLE_FIELDS = ("company_name", "salary", "requirements", "position", "contacts")


class VacancyService:
    def __init__(self, repository: SQLRepository, images: ImageService) -> None:
        self.repository = repository
        self.images = images

    def get_vacancies(self, page: int | None, limit: int | None) -> pagination.Page:
        page_number, per_page = pagination.normalize(page, limit)
        total, items = self.repository.list_vacancies(
            offset=pagination.offset_for(page_number, per_page), limit=per_page
        )
        return pagination.build_page(total, page_number, per_page, [vacancy_view(v) for v in items])

    def get_vacancy_by_id(self, vacancy_id: str) -> dict | ContentFailure:
        vacancy = self.repository.get_vacancy(vacancy_id)
        if vacancy is None:
            return ContentFailure(ContentErrorKind.VACANCY_NOT_FOUND)
        return vacancy_view(vacancy)

    def create_vacancy(self, *, company_logo: Optional[str], **fields: Any) -> dict | ContentFailure:
        if not company_logo:
            return ContentFailure(ContentErrorKind.LOGO_REQUIRED)
        values = {key: fields[key] for key in EDITABLE_FIELDS if key in fields}
        values["contacts"] = list(values.get("contacts") or [])
        try:
            vacancy = self.repository.create_vacancy(company_logo=company_logo, **values)
        except Exception:
            self.images.remove_image(ImageFolder.COMPANY_LOGOS, company_logo)
            raise
        logger.info("vacancy_created", vacancy_id=vacancy.id)
        return {"message": VACANCY_CREATED, "vacancy": vacancy_view(vacancy)}

    def update_vacancy(
        self,
        vacancy_id: str,
        *,
        updated_by: str,
        fields: dict[str, Any],
        company_logo: Optional[str] = None,
    ) -> dict | ContentFailure:
        vacancy = self.repository.get_vacancy(vacancy_id)
        if vacancy is None:
            self.images.remove_image(ImageFolder.COMPANY_LOGOS, company_logo)
            return ContentFailure(ContentErrorKind.VACANCY_NOT_FOUND)
        old_logo = vacancy.company_logo if company_logo else None
        for key in EDITABLE_FIELDS:
            if fields.get(key) is not None:
                setattr(vacancy, key, fields[key])
        if company_logo:
            vacancy.company_logo = company_logo
        vacancy.updated_by = updated_by
        vacancy.last_update = datetime.now(timezone.utc)
        try:
            vacancy = self.repository.save_vacancy(vacancy)
        except Exception:
            self.images.remove_image(ImageFolder.COMPANY_LOGOS, company_logo)
            raise
        self.images.remove_image(ImageFolder.COMPANY_LOGOS, old_logo)
        logger.info("vacancy_updated", vacancy_id=vacancy.id, updated_by=updated_by)
        return {"message": VACANCY_UPDATED, "vacancy": vacancy_view(vacancy)}

    def delete_vacancy(self, vacancy_id: str) -> dict | ContentFailure:
        vacancy = self.repository.get_vacancy(vacancy_id)
        if vacancy is None or not self.repository.delete_vacancy(vacancy_id):
            return ContentFailure(ContentErrorKind.VACANCY_NOT_FOUND)
        self.images.remove_image(ImageFolder.COMPANY_LOGOS, vacancy.company_logo)
        logger.info("vacancy_deleted", vacancy_id=vacancy_id)
        return {"message": VACANCY_DELETED}
