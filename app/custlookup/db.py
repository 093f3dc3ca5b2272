from __future__ import annotations

import logging
from contextlib import contextmanager
from collections.abc import Generator

from flask import Flask
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from app.custlookup.config import Settings

logger = logging.getLogger(__name__)


def create_db_engine(settings: Settings) -> Engine:
    engine_kwargs: dict[str, object] = {
        "future": True,
        "pool_pre_ping": True,
    }
    if settings.is_postgres:
        engine_kwargs.update(
            {
                "pool_recycle": 1800,
                "pool_size": settings.db_pool_size,
                "max_overflow": settings.db_max_overflow,
                "pool_timeout": settings.db_pool_timeout,
            }
        )
        if settings.db_statement_timeout_ms:
            # Server-side cap so an abandoned query does not keep running.
            engine_kwargs["connect_args"] = {
                "options": f"-c statement_timeout={settings.db_statement_timeout_ms}"
            }
    engine = create_engine(settings.database_url, **engine_kwargs)
    if not settings.is_production:
        @event.listens_for(engine, "checkout")
        def _receive_checkout(dbapi_connection, connection_record, connection_proxy):  # type: ignore[no-redef]
            logger.debug("DB connection checkout from pool")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


def init_db(app: Flask, settings: Settings) -> None:
    engine = create_db_engine(settings)
    app.extensions["sqlalchemy_engine"] = engine
    app.extensions["sqlalchemy_sessionmaker"] = create_session_factory(engine)


@contextmanager
def session_scope(app: Flask) -> Generator[Session, None, None]:
    """
    Non-request helper for scripts: yields a session and commits/rolls back.
    """
    sm = app.extensions["sqlalchemy_sessionmaker"]
    s: Session = sm()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()


@contextmanager
def read_session(sm: sessionmaker[Session]) -> Generator[Session, None, None]:
    """
    Read-only scope: never commits. The transaction is rolled back and the
    connection returned to the pool on every exit path, including
    KeyboardInterrupt raised while a query is in flight.
    """
    s: Session = sm()
    try:
        yield s
    finally:
        s.rollback()
        s.close()
