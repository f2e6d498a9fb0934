"""SQLAlchemy models for accounts, sessions and portal content."""
from __future__ import annotations

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    JSON,
    func,
)

from .session import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    name = Column(String(64), nullable=False)
    surname = Column(String(64), nullable=False)
    phone_number = Column(String(32), nullable=False, default="")
    is_activated = Column(Boolean, default=False, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    activation_link = Column(String(64), nullable=True, index=True)
    reset_code = Column(Integer, nullable=True)
    education = Column(String(64), nullable=True)
    specialty = Column(String(64), nullable=True)
    year_of_release = Column(Integer, nullable=True)
    place = Column(String(255), nullable=True)
    work_place = Column(String(255), nullable=True)
    position_at_work = Column(String(255), nullable=True)
    short_biography = Column(Text, nullable=True)
    education_and_goals = Column(Text, nullable=True)
    avatar = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    refresh_token = Column(Text, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class News(Base):
    __tablename__ = "news"

    id = Column(String(32), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=False)
    poster = Column(String(255), nullable=False)
    short_describe = Column(Text, nullable=False)
    content = Column(JSON, nullable=False, default=list)
    news_images = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_update = Column(DateTime(timezone=True), nullable=True)
    updated_by = Column(String(255), nullable=False, default="Not updated yet")


class Vacancy(Base):
    __tablename__ = "vacancies"

    id = Column(String(32), primary_key=True, default=_new_id)
    company_name = Column(String(255), nullable=False)
    company_logo = Column(String(255), nullable=False)
    salary = Column(String(64), nullable=False)
    requirements = Column(Text, nullable=False)
    position = Column(String(255), nullable=False)
    contacts = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_update = Column(DateTime(timezone=True), nullable=True)
    updated_by = Column(String(255), nullable=False, default="Not updated yet")
