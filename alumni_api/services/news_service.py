"""News articles: listing, lookup and admin CRUD with poster/gallery images."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from alumni_api.core.errors import ContentErrorKind, ContentFailure
from alumni_api.domain import pagination
from alumni_api.domain.images import ImageFolder
from alumni_api.domain.projections import news_view
from alumni_api.repositories.sql_repository import SQLRepository
from alumni_api.services.image_service import ImageService

logger = structlog.get_logger(__name__)

NEWS_CREATED = "News successful created"
NEWS_UPDATED = "News successful updated"
NEWS_DELETED = "News successful deleted"

EDITABLE_FIELDS = ("title", "short_describe", "content")


class NewsService:
    def __init__(self, repository: SQLRepository, images: ImageService) -> None:
        self.repository = repository
        self.images = images

    def _discard(self, poster: Optional[str], news_images: Optional[list[str]]) -> None:
        self.images.remove_image(ImageFolder.POSTERS, poster)
        for name in news_images or []:
            self.images.remove_image(ImageFolder.NEWS_IMAGES, name)

    def get_news(self, page: int | None, limit: int | None) -> pagination.Page:
        page_number, per_page = pagination.normalize(page, limit)
        total, items = self.repository.list_news(offset=pagination.offset_for(page_number, per_page), limit=per_page)
        return pagination.build_page(total, page_number, per_page, [news_view(n) for n in items])

    def get_news_by_id(self, news_id: str) -> dict | ContentFailure:
        news = self.repository.get_news(news_id)
        if news is None:
            return ContentFailure(ContentErrorKind.NEWS_NOT_FOUND)
        return news_view(news)

    def create_news(
        self,
        *,
        title: str,
        short_describe: str,
        content: list[dict],
        poster: Optional[str],
        news_images: Optional[list[str]] = None,
    ) -> dict | ContentFailure:
        if not poster:
            self._discard(None, news_images)
            return ContentFailure(ContentErrorKind.POSTER_REQUIRED)
        try:
            news = self.repository.create_news(
                title=title,
                short_describe=short_describe,
                content=list(content or []),
                poster=poster,
                news_images=list(news_images or []),
            )
        except Exception:
            self._discard(poster, news_images)
            raise
        logger.info("news_created", news_id=news.id)
        return {"message": NEWS_CREATED, "news": news_view(news)}

    def update_news(
        self,
        news_id: str,
        *,
        updated_by: str,
        fields: dict[str, Any],
        poster: Optional[str] = None,
        news_images: Optional[list[str]] = None,
    ) -> dict | ContentFailure:
        news = self.repository.get_news(news_id)
        if news is None:
            self._discard(poster, news_images)
            return ContentFailure(ContentErrorKind.NEWS_NOT_FOUND)
        old_poster = news.poster if poster else None
        old_images = list(news.news_images or []) if news_images is not None else None
        for key in EDITABLE_FIELDS:
            if fields.get(key) is not None:
                setattr(news, key, fields[key])
        if news_images is not None:
            news.news_images = list(news_images)
        if poster:
            news.poster = poster
        news.updated_by = updated_by
        news.last_update = datetime.now(timezone.utc)
        try:
            news = self.repository.save_news(news)
        except Exception:
            self._discard(poster, news_images)
            raise
        # Old files go only once the row no longer references them.
        self._discard(old_poster, old_images)
        logger.info("news_updated", news_id=news.id, updated_by=updated_by)
        return {"message": NEWS_UPDATED, "news": news_view(news)}

    def delete_news(self, news_id: str) -> dict | ContentFailure:
        news = self.repository.get_news(news_id)
        if news is None or not self.repository.delete_news(news_id):
            return ContentFailure(ContentErrorKind.NEWS_NOT_FOUND)
        self._discard(news.poster, news.news_images)
        logger.info("news_deleted", news_id=news_id)
        return {"message": NEWS_DELETED}
