#!/usr/bin/env python3
"""
Connection Check Script

Reports which store the server would select on startup.
Usage: python scripts/check_connections.py
"""
import logging

from nexusai.core.config import configure_logging, get_settings
from nexusai.db.mongodb import connect_mongo
from nexusai.db.sqlite import create_sqlite_engine, test_sqlite_connection


def main():
    settings = get_settings()
    configure_logging(settings)
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    print("=" * 50)
    print("NEXUSAI - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Testing MongoDB...")
    if settings.mongodb_uri:
        print(f"    Database: {settings.mongodb_db} (timeout {settings.mongodb_timeout_ms} ms)")
        try:
            db = connect_mongo(settings)
            db.client.close()
            print("    ✅ MongoDB: CONNECTED")
            mongo_ok = True
        except Exception as e:
            print(f"    ❌ MongoDB: FAILED ({e})")
            mongo_ok = False
    else:
        print("    ⚠️  MongoDB: MONGODB_URI not configured")
        mongo_ok = False

    print("\n[2] Testing SQLite fallback...")
    print(f"    File: {settings.sqlite_path}")
    engine = create_sqlite_engine(settings.sqlite_url)
    if test_sqlite_connection(engine):
        print("    ✅ SQLite: OK")
    else:
        print("    ❌ SQLite: FAILED")
    engine.dispose()

    print("\n" + "=" * 50)
    print(f"Server would use: {'mongodb' if mongo_ok else 'sqlite'}")
    print("=" * 50)


if __name__ == "__main__":
    main()
