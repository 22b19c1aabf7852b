"""Engine and session factory bound to ``DATABASE_URL``."""
from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from tasker.core.config import settings


def build_engine(database_url: str) -> Engine:
    connect_args: Dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True, future=True)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def create_all(bind: Engine | None = None) -> None:
    """Create any missing tables; schema migrations are out of scope."""
    from tasker.db.base import Base
    from tasker.db import models  # noqa: F401  ensure models are registered

    Base.metadata.create_all(bind=bind or engine)
