from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from alumni_api.domain import pagination
from alumni_api.domain.images import ImageFolder
from alumni_api.routers.deps import current_user, get_services, require_admin, unwrap
from alumni_api.routers.forms import parse_json_list
from alumni_api.services.registry import Services

router = APIRouter(prefix="/vacancies", tags=["vacancies"])

CONTACT_KEYS = ("whatsapp", "telegram", "email")


@router.get("")
def get_vacancies(
    page: int = Query(pagination.DEFAULT_PAGE, ge=1, le=pagination.MAX_PAGE),
    limit: int = Query(pagination.DEFAULT_LIMIT, ge=1, le=pagination.MAX_LIMIT),
    _user: dict = Depends(current_user),
    services: Services = Depends(get_services),
):
    return services.vacancies.get_vacancies(page, limit).as_dict()


@router.post("/create-vacancy")
def create_vacancy(
    company_name: str = Form(..., alias="companyName", min_length=1, max_length=255),
    salary: str = Form(..., min_length=1, max_length=64),
    requirements: str = Form(..., min_length=1),
    position: str = Form(..., min_length=1, max_length=255),
    contacts: Optional[str] = Form(None),
    company_logos: Optional[UploadFile] = File(None, alias="companyLogos"),
    _admin: dict = Depends(require_admin),
    services: Services = Depends(get_services),
):
    contact_list = parse_json_list(contacts, "contacts", CONTACT_KEYS) or []
    logo = services.images.save_optional(ImageFolder.COMPANY_LOGOS, company_logos)
    result = services.vacancies.create_vacancy(
        company_logo=logo,
        company_name=company_name,
        salary=salary,
        requirements=requirements,
        position=position,
        contacts=contact_list,
    )
    return unwrap(result)


@router.get("/{vacancy_id}")
def get_vacancy_by_id(vacancy_id: str, _user: dict = Depends(current_user), services: Services = Depends(get_services)):
    return unwrap(services.vacancies.get_vacancy_by_id(vacancy_id))


@router.put("/update-vacancy/{vacancy_id}")
def update_vacancy(
    vacancy_id: str,
    company_name: Optional[str] = Form(None, alias="companyName", max_length=255),
    salary: Optional[str] = Form(None, max_length=64),
    requirements: Optional[str] = Form(None),
    position: Optional[str] = Form(None, max_length=255),
    contacts: Optional[str] = Form(None),
    company_logos: Optional[UploadFile] = File(None, alias="companyLogos"),
    admin: dict = Depends(require_admin),
    services: Services = Depends(get_services),
):
    fields = {
        "company_name": company_name,
        "salary": salary,
        "requirements": requirements,
        "position": position,
        "contacts": parse_json_list(contacts, "contacts", CONTACT_KEYS),
    }
    logo = services.images.save_optional(ImageFolder.COMPANY_LOGOS, company_logos)
    result = services.vacancies.update_vacancy(
        vacancy_id,
        updated_by=str(admin.get("email") or ""),
        fields=fields,
        company_logo=logo,
    )
    return unwrap(result)


@router.delete("/delete-vacancy/{vacancy_id}")
def delete_vacancy(vacancy_id: str, _admin: dict = Depends(require_admin), services: Services = Depends(get_services)):
    return unwrap(services.vacancies.delete_vacancy(vacancy_id))
