"""Database engine and session factory creation.

Tenant read filters are attached to session event targets, so the session
factory created here can be handed to ``SQLAlchemyDataMapper`` to scope
only the sessions it produces.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "create_engine_from_settings",
    "create_session_factory",
]


def create_engine_from_settings(settings: DatabaseSettings) -> Engine:
    """Create a synchronous engine from database settings.

    In-memory SQLite URLs use a single shared connection so every session
    sees the same database.

    Args:
        settings: Database connection settings

    Returns:
        Configured engine
    """
    kwargs: dict = {"echo": settings.echo}
    if settings.url.startswith("sqlite") and ":memory:" in settings.url:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_pre_ping"] = True  # Verify connections before using

    return create_engine(settings.url, **kwargs)


def create_session_factory(engine: Engine | None = None) -> sessionmaker[Session]:
    """Create a session factory.

    Args:
        engine: Engine to bind; may be omitted and passed per session instead

    Returns:
        Session factory producing sessions that do not expire on commit
    """
    return sessionmaker(bind=engine, expire_on_commit=False)
