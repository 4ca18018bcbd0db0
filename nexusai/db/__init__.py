"""
Database module - MongoDB and SQLite connections.
"""
from nexusai.db.mongodb import connect_mongo, init_mongo_indexes
from nexusai.db.sqlite import create_sqlite_engine, init_sqlite_schema, get_db_session

__all__ = [
    "connect_mongo",
    "init_mongo_indexes",
    "create_sqlite_engine",
    "init_sqlite_schema",
    "get_db_session",
]
