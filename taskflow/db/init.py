"""Initialize database tables."""
from typing import Optional
from sqlmodel import SQLModel
from sqlalchemy.engine import Engine
import logging
import os

import taskflow.models  # noqa: F401  registers the tables on SQLModel.metadata
from taskflow.db.config import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Optional[Engine] = None, reset: Optional[bool] = None) -> None:
    """Create all tables. With ``reset`` (or RESET_DB=true) existing tables are dropped first."""
    engine = engine or default_engine
    if reset is None:
        reset = os.environ.get("RESET_DB", "false").lower() == "true"

    if reset:
        logger.warning("Dropping all tables before recreating them")
        SQLModel.metadata.drop_all(engine)

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created successfully")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
