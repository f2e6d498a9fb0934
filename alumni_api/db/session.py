"""Engine and session helpers; everything keys off Settings.database_url."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from alumni_api.core.config import get_settings

Base = declarative_base()


@lru_cache
def get_engine() -> Engine:
    url = (get_settings().database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured for the alumni API.")
    options: dict = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool.
        options["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **options)


@lru_cache
def _get_sessionmaker() -> sessionmaker:
    # Repositories hand entities back detached; keep loaded attributes readable after commit.
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False, future=True)


def reset_engine() -> None:
    """Dispose the cached engine so the next call re-reads DATABASE_URL."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()
    _get_sessionmaker.cache_clear()


@contextmanager
def get_session() -> Iterator[Session]:
    """Read-only unit of work."""
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def transaction() -> Iterator[Session]:
    """Unit of work committed on success and rolled back on any error."""
    session: Session = _get_sessionmaker()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
