"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def _build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database URL."""

    connect_args: dict[str, object] = {}
    if settings.database_url.startswith("sqlite"):
        # Sessions are opened from the threadpool as well as the event loop.
        connect_args["check_same_thread"] = False
    return create_engine(
        settings.database_url, pool_pre_ping=True, connect_args=connect_args
    )


engine = _build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _seed_roles(session: Session) -> None:
    """Insert the default roles when they are missing."""

    from app.domain.entities import DEFAULT_ROLES
    from app.infrastructure.models import RoleModel

    existing = {alias for (alias,) in session.query(RoleModel.alias).all()}
    missing = [(name, alias) for name, alias in DEFAULT_ROLES if alias not in existing]
    if not missing:
        return
    for name, alias in missing:
        session.add(RoleModel(name=name, alias=alias))
    session.commit()
    logger.info("Seeded roles: %s", ", ".join(alias for _, alias in missing))


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    session = SessionLocal()
    try:
        _seed_roles(session)
    finally:
        session.close()


def get_db() -> Generator:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
