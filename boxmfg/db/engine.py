# boxmfg/db/engine.py

import logging
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from boxmfg import config
from boxmfg.db.schema import metadata

logger = logging.getLogger(__name__)

MEMORY_URL = "sqlite://"

_engine: Optional[Engine] = None
# Set once when the configured database was unreachable at startup; never cleared.
_degraded = False


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite") and (url == MEMORY_URL or ":memory:" in url):
        # One shared connection, otherwise every checkout sees an empty database
        return create_engine(
            url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, future=True, connect_args={"check_same_thread": False})
    return create_engine(url, future=True, pool_pre_ping=True)


def set_engine(engine: Optional[Engine]) -> None:
    """Install (or clear, with None) the process-wide engine."""
    global _engine
    _engine = engine


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = _build_engine(config.DATABASE_URL)
    return _engine


def is_degraded() -> bool:
    return _degraded


def init_db() -> Engine:
    """
    Connect to the configured database and create missing tables.

    When the database can't be reached and STORAGE_FALLBACK is on, the process
    keeps running on an in-memory SQLite database and is flagged as degraded.
    """
    global _degraded

    engine = get_engine()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        metadata.create_all(engine)
        logger.info("Database connected: %s", engine.url.render_as_string(hide_password=True))
        return engine
    except SQLAlchemyError as exc:
        logger.error("Database connection failed: %s", exc)
        if not config.STORAGE_FALLBACK:
            raise

    logger.warning("Using in-memory database; data will not survive a restart")
    engine = _build_engine(MEMORY_URL)
    metadata.create_all(engine)
    set_engine(engine)
    _degraded = True
    return engine
