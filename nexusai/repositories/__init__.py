"""
Repositories - persistence backends behind one interface.

The backend is chosen once, at process start:
- MongoDB when a URI is configured and the server answers within the timeout
- SQLite otherwise, for the rest of the process lifetime (no retry)
"""

import logging

from nexusai.core.config import Settings
from nexusai.db.mongodb import connect_mongo, init_mongo_indexes
from nexusai.db.sqlite import create_sqlite_engine, init_sqlite_schema
from nexusai.repositories.base import PlacementRepository
from nexusai.repositories.mongo_repository import MongoRepository
from nexusai.repositories.sql_repository import SqlRepository

logger = logging.getLogger(__name__)

__all__ = [
    "PlacementRepository",
    "MongoRepository",
    "SqlRepository",
    "select_repository",
    "create_sql_repository",
]


def create_sql_repository(settings: Settings) -> SqlRepository:
    engine = create_sqlite_engine(settings.sqlite_url, echo=settings.debug)
    init_sqlite_schema(engine)
    return SqlRepository(engine)


def select_repository(settings: Settings) -> PlacementRepository:
    """Resolve the active backend. Never raises on a MongoDB failure."""
    db = None
    try:
        db = connect_mongo(settings)
        init_mongo_indexes(db)
    except Exception as e:
        if db is not None:
            db.client.close()
        logger.warning("MongoDB connection failed, falling back to local SQLite: %s", e)
        logger.info("Tip: To use MongoDB Atlas, ensure 0.0.0.0/0 is whitelisted in your Atlas Network Access settings.")
        repository = create_sql_repository(settings)
        logger.info("Using SQLite store at %s", settings.sqlite_path)
        return repository

    logger.info("Connected to MongoDB database '%s'", settings.mongodb_db)
    return MongoRepository(db)
