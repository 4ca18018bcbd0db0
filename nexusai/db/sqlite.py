"""
SQLite Connection Utility - local relational fallback.

Three tables, no foreign keys enforced:
- jobs: flat columns, skillsRequired stored comma-joined
- users: flat columns, skills stored comma-joined
- applications: one row per apply action, joined to users by uid
"""
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS jobs (
        id TEXT PRIMARY KEY,
        title TEXT,
        company TEXT,
        location TEXT,
        salary TEXT,
        type TEXT,
        description TEXT,
        matchScore INTEGER,
        recruiterId TEXT,
        skillsRequired TEXT,
        experienceLevel TEXT,
        benefits TEXT,
        deadline TEXT,
        postedAt TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS users (
        uid TEXT PRIMARY KEY NOT NULL,
        email TEXT,
        name TEXT,
        role TEXT,
        profileStrength INTEGER,
        collegeId TEXT,
        skills TEXT,
        bio TEXT,
        createdAt TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS applications (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        jobId TEXT,
        uid TEXT,
        status TEXT,
        appliedAt TEXT
    )
    """,
]


def create_sqlite_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the process-wide SQLite engine.

    In-memory URLs share one connection (StaticPool) so every session sees
    the same database; file URLs use the default pool.
    """
    connect_args = {"check_same_thread": False}
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool, echo=echo)
    return create_engine(url, connect_args=connect_args, echo=echo)


def init_sqlite_schema(engine: Engine) -> None:
    """Create tables if needed. sqlite3 runs one statement per execute."""
    with engine.begin() as conn:
        for ddl in SCHEMA:
            conn.execute(text(ddl))


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session(session_factory: sessionmaker):
    """
    Context manager for database sessions.
    Usage:
        with get_db_session(factory) as db:
            db.execute(text("SELECT * FROM jobs"))
    """
    session: Session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_sqlite_connection(engine: Engine) -> bool:
    """
    Test if the SQLite file can be opened.
    Returns True if connection successful, False otherwise.
    """
    try:
        with engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1
    except Exception:
        return False
