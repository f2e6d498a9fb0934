"""
Create (or recreate) the alumni schema on the configured DATABASE_URL.

Usage:
  python -m alumni_api.db.create_tables [--drop]
"""
from __future__ import annotations

import argparse

import structlog
from sqlalchemy.exc import SQLAlchemyError

from . import models  # noqa: F401  # registers tables on Base.metadata
from .session import Base, get_engine

logger = structlog.get_logger(__name__)


def create_all() -> None:
    Base.metadata.create_all(bind=get_engine())
    logger.info("schema_created", tables=sorted(Base.metadata.tables))


def drop_all() -> None:
    Base.metadata.drop_all(bind=get_engine())
    logger.info("schema_dropped")


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Create the alumni API tables")
    ap.add_argument("--drop", action="store_true", help="Drop existing tables first (destroys data)")
    args = ap.parse_args(argv)
    try:
        if args.drop:
            drop_all()
        create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Alumni tables ready.")


if __name__ == "__main__":
    main()
