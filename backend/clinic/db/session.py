import logging
from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from clinic.core.config import get_database_url
from clinic.core.db import register_query_timing

logger = logging.getLogger(__name__)

Base = declarative_base()

# Built on first use so tests can point DATABASE_URL elsewhere beforehand
_engine = None
_engine_url = None
_session_factory = None


def _engine_options(url: URL) -> Dict[str, Any]:
    """Pool and driver options for the given database URL."""
    if url.drivername.startswith("postgres"):
        return {
            "pool_size": 10,
            "max_overflow": 20,
            "pool_pre_ping": True,
            "pool_recycle": 3600,
            "connect_args": {
                "application_name": "clinic_backend",
                "connect_timeout": 10,
            },
        }
    if url.drivername.startswith("sqlite"):
        options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every session sees an empty db
            options["poolclass"] = StaticPool
        return options
    return {}


def get_engine():
    """Engine for the current DATABASE_URL, rebuilt if the URL has changed."""
    global _engine, _engine_url, _session_factory

    database_url = get_database_url()
    if _engine is not None and _engine_url == database_url:
        return _engine

    if _engine is not None:
        _engine.dispose()
        _session_factory = None

    url = make_url(database_url)
    _engine = create_engine(database_url, echo=False, **_engine_options(url))
    _engine_url = database_url
    register_query_timing(_engine)
    logger.debug(
        "Database engine created",
        extra={
            "context": {
                "url": url.render_as_string(hide_password=True),
                "dialect": _engine.dialect.name,
            }
        },
    )
    return _engine


def get_sessionmaker() -> sessionmaker:
    global _session_factory
    engine = get_engine()
    if _session_factory is None:
        # Objects stay readable after commit; repositories map them right away
        _session_factory = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )
    return _session_factory


def SessionLocal() -> Session:
    """Open a new session on the current engine. Callers close it."""
    return get_sessionmaker()()


def create_tables():
    # Importing the models registers them on Base.metadata
    from clinic.db import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_tables():
    from clinic.db import base  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())
