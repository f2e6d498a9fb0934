from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from alumni_api.core.errors import VALIDATION_ERROR, ApiError
from alumni_api.domain import pagination
from alumni_api.domain.images import ImageFolder
from alumni_api.routers.deps import current_user, get_services, require_admin, unwrap
from alumni_api.routers.forms import parse_json_list
from alumni_api.services.registry import Services

router = APIRouter(prefix="/news", tags=["news"])

CONTENT_KEYS = ("title", "paragraph")
MAX_NEWS_IMAGES = 6


def _save_news_images(
    services: Services, posters: Optional[UploadFile], uploads: Optional[List[UploadFile]]
) -> tuple[Optional[str], Optional[list[str]]]:
    """Store the poster and gallery together; returns (poster, gallery), None where nothing was sent."""
    gallery = [u for u in (uploads or []) if u.filename]
    if len(gallery) > MAX_NEWS_IMAGES:
        raise ApiError.bad_request(VALIDATION_ERROR, [{"field": "newsImages", "msg": f"At most {MAX_NEWS_IMAGES} images"}])
    has_poster = posters is not None and bool(posters.filename)
    batch = [(ImageFolder.POSTERS, posters)] if has_poster else []
    batch += [(ImageFolder.NEWS_IMAGES, u) for u in gallery]
    names = services.images.save_uploads(batch)
    poster = names.pop(0) if has_poster else None
    return poster, (names or None)


@router.get("")
def get_news(
    page: int = Query(pagination.DEFAULT_PAGE, ge=1, le=pagination.MAX_PAGE),
    limit: int = Query(pagination.DEFAULT_LIMIT, ge=1, le=pagination.MAX_LIMIT),
    _user: dict = Depends(current_user),
    services: Services = Depends(get_services),
):
    return services.news.get_news(page, limit).as_dict()


@router.post("/create-news")
def create_news(
    title: str = Form(..., min_length=1, max_length=255),
    short_describe: str = Form(..., alias="shortDescribe", min_length=1),
    content: Optional[str] = Form(None),
    posters: Optional[UploadFile] = File(None),
    news_images: Optional[List[UploadFile]] = File(None, alias="newsImages"),
    _admin: dict = Depends(require_admin),
    services: Services = Depends(get_services),
):
    blocks = parse_json_list(content, "content", CONTENT_KEYS) or []
    poster, gallery = _save_news_images(services, posters, news_images)
    result = services.news.create_news(
        title=title,
        short_describe=short_describe,
        content=blocks,
        poster=poster,
        news_images=gallery,
    )
    return unwrap(result)


@router.get("/{news_id}")
def get_news_by_id(news_id: str, _user: dict = Depends(current_user), services: Services = Depends(get_services)):
    return unwrap(services.news.get_news_by_id(news_id))


@router.put("/update-news/{news_id}")
def update_news(
    news_id: str,
    title: Optional[str] = Form(None, min_length=1, max_length=255),
    short_describe: Optional[str] = Form(None, alias="shortDescribe"),
    content: Optional[str] = Form(None),
    posters: Optional[UploadFile] = File(None),
    news_images: Optional[List[UploadFile]] = File(None, alias="newsImages"),
    admin: dict = Depends(require_admin),
    services: Services = Depends(get_services),
):
    fields = {
        "title": title,
        "short_describe": short_describe,
        "content": parse_json_list(content, "content", CONTENT_KEYS),
    }
    poster, gallery = _save_news_images(services, posters, news_images)
    result = services.news.update_news(
        news_id,
        updated_by=str(admin.get("email") or ""),
        fields=fields,
        poster=poster,
        news_images=gallery,
    )
    return unwrap(result)


@router.delete("/delete-news/{news_id}")
def delete_news(news_id: str, _admin: dict = Depends(require_admin), services: Services = Depends(get_services)):
    return unwrap(services.news.delete_news(news_id))
