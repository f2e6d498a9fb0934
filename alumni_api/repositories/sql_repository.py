"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Sequence, TypeVar

from sqlalchemy import delete, func, select

from alumni_api.core.errors import DuplicateEmailError
from alumni_api.db.models import News, RefreshToken, User, Vacancy
from alumni_api.db.session import get_session, transaction

T = TypeVar("T")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SQLRepository:
    """CRUD helpers for accounts, refresh tokens, news and vacancies."""

    # -------------------------- generic --------------------------
    def _insert(self, entity: T) -> T:
        with transaction() as session:
            session.add(entity)
            session.flush()
            session.refresh(entity)
        return entity

    def _save(self, entity: T) -> T:
        with transaction() as session:
            merged = session.merge(entity)
            session.flush()
            session.refresh(merged)
        return merged

    def _delete_where(self, model, *conditions) -> int:
        with transaction() as session:
            result = session.execute(delete(model).where(*conditions))
            removed = int(result.rowcount or 0)
        return removed

    def _page(self, model, conditions: Sequence, *, offset: int, limit: int) -> tuple[int, list]:
        """Total matching rows plus one newest-first slice of them."""
        with get_session() as session:
            total = session.execute(select(func.count()).select_from(model).where(*conditions)).scalar_one()
            stmt = select(model).where(*conditions).order_by(model.created_at.desc()).offset(offset).limit(limit)
            return int(total), list(session.execute(stmt).scalars().all())

    # -------------------------- users --------------------------
    def find_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            return session.execute(select(User).where(User.email == email)).scalar_one_or_none()

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        if not user_id:
            return None
        with get_session() as session:
            return session.get(User, user_id)

    def find_user_by_activation_link(self, activation_link: str) -> Optional[User]:
        if not activation_link:
            return None
        with get_session() as session:
            stmt = select(User).where(User.activation_link == activation_link)
            return session.execute(stmt).scalars().first()

    def create_user(self, **fields: Any) -> User:
        email = fields.get("email") or ""
        if self.find_user_by_email(email) is not None:
            raise DuplicateEmailError(email)
        fields.setdefault("created_at", _now())
        return self._insert(User(**fields))

    def save_user(self, user: User) -> User:
        return self._save(user)

    def list_users(self, *, offset: int, limit: int, filters: dict | None = None) -> tuple[int, list[User]]:
        """Alumni directory: non-admin accounts narrowed by the optional filters."""
        filters = filters or {}
        conditions = [User.is_admin.is_(False)]
        if filters.get("name"):
            conditions.append(User.name.ilike(f"%{filters['name']}%"))
        if filters.get("year_of_release") is not None:
            conditions.append(User.year_of_release == filters["year_of_release"])
        if filters.get("education"):
            conditions.append(User.education == filters["education"])
        if filters.get("specialty"):
            conditions.append(User.specialty == filters["specialty"])
        return self._page(User, conditions, offset=offset, limit=limit)

    # -------------------------- refresh tokens --------------------------
    def find_refresh_token_by_user(self, user_id: str) -> Optional[RefreshToken]:
        with get_session() as session:
            stmt = select(RefreshToken).where(RefreshToken.user_id == user_id)
            return session.execute(stmt).scalar_one_or_none()

    def find_refresh_token(self, token: str) -> Optional[RefreshToken]:
        if not token:
            return None
        with get_session() as session:
            stmt = select(RefreshToken).where(RefreshToken.refresh_token == token)
            return session.execute(stmt).scalars().first()

    def upsert_refresh_token(self, user_id: str, token: str) -> RefreshToken:
        with transaction() as session:
            record = session.execute(
                select(RefreshToken).where(RefreshToken.user_id == user_id)
            ).scalar_one_or_none()
            if record is None:
                record = RefreshToken(user_id=user_id)
                session.add(record)
            record.refresh_token = token
            record.updated_at = _now()
            session.flush()
            session.refresh(record)
        return record

    def delete_refresh_token(self, token: str) -> None:
        self._delete_where(RefreshToken, RefreshToken.refresh_token == token)

    # -------------------------- news --------------------------
    def get_news(self, news_id: str) -> Optional[News]:
        if not news_id:
            return None
        with get_session() as session:
            return session.get(News, news_id)

    def create_news(self, **fields: Any) -> News:
        fields.setdefault("created_at", _now())
        return self._insert(News(**fields))

    def save_news(self, entity: News) -> News:
        return self._save(entity)

    def delete_news(self, news_id: str) -> bool:
        return self._delete_where(News, News.id == news_id) > 0

    def list_news(self, *, offset: int, limit: int) -> tuple[int, list[News]]:
        return self._page(News, [], offset=offset, limit=limit)

    # -------------------------- vacancies --------------------------
    def get_vacancy(self, vacancy_id: str) -> Optional[Vacancy]:
        if not vacancy_id:
            return None
        with get_session() as session:
            return session.get(Vacancy, vacancy_id)

    def create_vacancy(self, **fields: Any) -> Vacancy:
        fields.setdefault("created_at", _now())
        return self._insert(Vacancy(**fields))

    def save_vacancy(self, entity: Vacancy) -> Vacancy:
        return self._save(entity)

    def delete_vacancy(self, vacancy_id: str) -> bool:
        return self._delete_where(Vacancy, Vacancy.id == vacancy_id) > 0

    def list_vacancies(self, *, offset: int, limit: int) -> tuple[int, list[Vacancy]]:
        return self._page(Vacancy, [], offset=offset, limit=limit)
