"""Database engine and session management for the game record store."""

from collections.abc import Iterator
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from trendline.config import settings


class Base(DeclarativeBase):
    """Declarative base for the record store read-models."""


@lru_cache
def get_engine() -> Engine:
    """Create the engine on first use so importing models needs no driver."""
    return create_engine(
        settings.sync_database_url,
        pool_pre_ping=True,
        echo=settings.debug,
    )


@lru_cache
def get_session_maker() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), expire_on_commit=False)


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a database session."""
    session = get_session_maker()()
    try:
        yield session
    finally:
        session.close()
