"""
MongoDB Connection Utility

MongoDB stores:
- jobs: Job postings (identity is the generated ObjectId)
- users: Students, colleges and recruiters, with applications embedded

The connection is attempted once at startup with a bounded server
selection timeout; callers decide what to do when it fails.
"""
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from nexusai.core.config import Settings

# Collection name constants (avoid typos)
COLLECTIONS = {
    "jobs": "jobs",
    "users": "users"
}


def connect_mongo(settings: Settings) -> Database:
    """
    Connect to MongoDB and confirm the server answers a ping.

    Raises:
        ValueError: if no URI is configured
        pymongo.errors.PyMongoError: if the server is unreachable
    """
    if not settings.mongodb_uri:
        raise ValueError("No MONGODB_URI provided")

    client = MongoClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms
    )
    try:
        # ping forces server selection, so an unreachable cluster fails here
        client.admin.command("ping")
    except Exception:
        client.close()
        raise
    return client[settings.mongodb_db]


def init_mongo_indexes(db: Database) -> None:
    """
    Create indexes. uid and email are unique so duplicate
    users are rejected by the server itself.
    """
    users = db[COLLECTIONS["users"]]
    users.create_index("uid", unique=True)
    users.create_index("email", unique=True)
    users.create_index([("collegeId", ASCENDING), ("role", ASCENDING)])

    db[COLLECTIONS["jobs"]].create_index([("postedAt", DESCENDING)])
