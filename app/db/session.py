"""Database engine and session factory construction."""
from typing import Callable

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import Settings


def create_engine_from_settings(settings: Settings) -> Engine:
    """
    Build the engine for the configured database.

    SQLite gets no pool sizing and is opened with check_same_thread off,
    since FastAPI runs sync routes in a thread pool.
    """
    url = settings.get_database_url()
    connect_args = dict(settings.DB_CONNECT_ARGS)

    if url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)
        return create_engine(url, echo=settings.DB_ECHO, connect_args=connect_args)

    return create_engine(
        url,
        pool_pre_ping=True,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_POOL_OVERFLOW,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> Callable[[], Session]:
    # Services hand back schemas built after commit, so attributes must not expire.
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
