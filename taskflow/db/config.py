"""Database configuration for the taskflow backend."""
from typing import Generator
from sqlmodel import create_engine, Session
from sqlalchemy import event
from sqlalchemy.engine import Engine
from dotenv import load_dotenv
import logging
import os

logger = logging.getLogger(__name__)

load_dotenv()

# SQLite for local development, PostgreSQL in deployment
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./taskflow.db")
SQL_ECHO = os.environ.get("SQL_ECHO", "false").lower() == "true"


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless the pragma is set per connection."""

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, **kwargs) -> Engine:
    """Create an engine for ``url``, applying the SQLite specific setup when needed."""
    if is_sqlite(url):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(url, echo=SQL_ECHO, connect_args=connect_args, **kwargs)
        enable_sqlite_foreign_keys(engine)
    else:
        engine = create_engine(url, echo=SQL_ECHO, pool_pre_ping=True, **kwargs)
    return engine


if is_sqlite(DATABASE_URL):
    logger.info(f"Using SQLite database: {DATABASE_URL}")
else:
    logger.info("Using PostgreSQL database")

engine = build_engine(DATABASE_URL)


def get_session() -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session
