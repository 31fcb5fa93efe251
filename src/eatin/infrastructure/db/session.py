from __future__ import annotations

import os
from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from eatin.infrastructure.db.models.base import Base


def database_url() -> str | None:
    return os.getenv("DATABASE_URL") or None


@lru_cache(maxsize=8)
def _build_engine(url: str, connect_timeout: int) -> Engine:
    connect_args: dict[str, object] = {}
    if url.startswith("postgresql"):
        connect_args["connect_timeout"] = connect_timeout
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def get_engine(timeout_seconds: float = 1.0) -> Engine:
    url = database_url()
    if url is None:
        raise RuntimeError("DATABASE_URL is not set")
    return _build_engine(url, max(1, int(timeout_seconds)))


def create_schema(engine: Engine) -> None:
    """Create the order table schema directly, for SQLite and tests; Postgres uses alembic."""
    # models register themselves on Base.metadata at import
    from eatin.infrastructure.db.models import order, order_table  # noqa: F401

    Base.metadata.create_all(engine)


def ping_database(timeout_seconds: float = 1.0) -> bool:
    if database_url() is None:
        return False
    try:
        with get_engine(timeout_seconds).connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
