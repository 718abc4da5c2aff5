import logging
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine
from .config import DEV, SQLITE_URL, POSTGRES_URL

logger = logging.getLogger(__name__)


def build_engine(url: str | None = None) -> Engine:
    """Open the process-wide engine. Called once at startup."""
    if url is None:
        if DEV:
            url = SQLITE_URL
        else:
            if not POSTGRES_URL:
                raise ValueError("POSTGRES_URL environment variable is required in production")
            url = POSTGRES_URL

    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False, "timeout": 30})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        logger.info("Using SQLite database at %s", url)
    else:
        engine = create_engine(url, pool_pre_ping=True)
        logger.info("Using PostgreSQL database")
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables(engine: Engine):
    # register every table on the metadata before create_all
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created")
