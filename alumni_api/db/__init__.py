"""SQLAlchemy base, engine and unit-of-work helpers."""

from .session import Base, get_engine, get_session, reset_engine, transaction

__all__ = ["Base", "get_engine", "get_session", "reset_engine", "transaction"]
