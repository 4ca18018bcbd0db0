"""
SQLite Repository - relational fallback backend.

Differences from the document store, kept on purpose:
- Job ids are random 9-character tokens generated here, not by the store
- List attributes are stored comma-joined and split back on read
- update_user only ever writes name and bio
- Only uid is unique (primary key); email uniqueness is not checked
"""

import secrets
import string
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from nexusai.db.sqlite import get_db_session, make_session_factory
from nexusai.repositories.base import (
    APPLIED_STATUS,
    JOB_FIELDS,
    Clock,
    PlacementRepository,
    job_replacement,
    prepare_new_job,
    utcnow,
)

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 9
LIST_DELIMITER = ","


def generate_job_id() -> str:
    """Random lowercase alphanumeric token."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def join_list(values: Optional[List[str]]) -> str:
    return LIST_DELIMITER.join(values or [])


def split_list(value: Optional[str]) -> List[str]:
    return value.split(LIST_DELIMITER) if value else []


def to_text(value: Any) -> Any:
    """Dates and timestamps are stored as ISO-8601 text."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def job_from_row(row) -> dict:
    job = dict(row)
    job["_id"] = job.pop("id")
    job["skillsRequired"] = split_list(job["skillsRequired"])
    return job


class SqlRepository(PlacementRepository):
    """Relational store over a single shared SQLite engine."""

    backend_name = "sqlite"

    def __init__(self, engine: Engine, clock: Clock = utcnow,
                 id_factory: Callable[[], str] = generate_job_id):
        super().__init__(clock)
        self.engine = engine
        self.session_factory = make_session_factory(engine)
        self.id_factory = id_factory

    # ------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------

    def list_jobs(self) -> List[dict]:
        with get_db_session(self.session_factory) as db:
            rows = db.execute(text("SELECT * FROM jobs ORDER BY postedAt DESC")).mappings().all()
        return [job_from_row(row) for row in rows]

    def create_job(self, data: Dict[str, Any]) -> dict:
        job_id = self.id_factory()
        record = prepare_new_job(data, self.clock())
        params = {key: to_text(value) for key, value in record.items()}
        params["skillsRequired"] = join_list(record["skillsRequired"])
        params["id"] = job_id

        with get_db_session(self.session_factory) as db:
            db.execute(
                text("""
                    INSERT INTO jobs (id, title, company, location, salary, type, description,
                        matchScore, recruiterId, skillsRequired, experienceLevel, benefits,
                        deadline, postedAt)
                    VALUES (:id, :title, :company, :location, :salary, :type, :description,
                        :matchScore, :recruiterId, :skillsRequired, :experienceLevel, :benefits,
                        :deadline, :postedAt)
                """),
                params
            )
            return self._get_job(db, job_id)

    def update_job(self, job_id: str, data: Dict[str, Any]) -> Optional[dict]:
        fields = job_replacement(data)
        params = {key: to_text(value) for key, value in fields.items()}
        params["skillsRequired"] = join_list(fields["skillsRequired"])
        params["id"] = job_id
        assignments = ", ".join(f"{field} = :{field}" for field in JOB_FIELDS)

        with get_db_session(self.session_factory) as db:
            db.execute(text(f"UPDATE jobs SET {assignments} WHERE id = :id"), params)
            return self._get_job(db, job_id)

    def delete_job(self, job_id: str) -> None:
        with get_db_session(self.session_factory) as db:
            db.execute(text("DELETE FROM jobs WHERE id = :id"), {"id": job_id})

    # ------------------------------------------------------------
    # Users
    # ------------------------------------------------------------

    def get_user(self, uid: str) -> Optional[dict]:
        with get_db_session(self.session_factory) as db:
            return self._get_user(db, uid)

    def create_user(self, data: Dict[str, Any]) -> Optional[dict]:
        """
        Insert a user.

        Raises:
            ValueError: missing uid
            IntegrityError: uid already registered
        """
        if not data.get("uid"):
            raise ValueError("uid is required")
        with get_db_session(self.session_factory) as db:
            db.execute(
                text("""
                    INSERT INTO users (uid, email, name, role, profileStrength, collegeId,
                        skills, bio, createdAt)
                    VALUES (:uid, :email, :name, :role, :profileStrength, :collegeId,
                        :skills, :bio, :createdAt)
                """),
                {
                    "uid": data.get("uid"),
                    "email": data.get("email"),
                    "name": data.get("name"),
                    "role": data.get("role"),
                    "profileStrength": data.get("profileStrength") or 0,
                    "collegeId": data.get("collegeId") or None,
                    "skills": join_list(data.get("skills")),
                    "bio": data.get("bio") or "",
                    "createdAt": to_text(self.clock())
                }
            )
            return self._get_user(db, data.get("uid"))

    def update_user(self, uid: str, data: Dict[str, Any]) -> Optional[dict]:
        """Only name and bio are written; both are replaced even when absent."""
        with get_db_session(self.session_factory) as db:
            db.execute(
                text("UPDATE users SET name = :name, bio = :bio WHERE uid = :uid"),
                {"name": data.get("name"), "bio": data.get("bio"), "uid": uid}
            )
            return self._get_user(db, uid)

    # ------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------

    def apply_to_job(self, job_id: str, uid: str) -> None:
        with get_db_session(self.session_factory) as db:
            db.execute(
                text("INSERT INTO applications (jobId, uid, status, appliedAt) VALUES (:jid, :uid, :status, :at)"),
                {"jid": job_id, "uid": uid, "status": APPLIED_STATUS, "at": to_text(self.clock())}
            )

    def list_college_students(self, college_id: str) -> List[dict]:
        with get_db_session(self.session_factory) as db:
            rows = db.execute(
                text("SELECT * FROM users WHERE collegeId = :cid AND role = 'student'"),
                {"cid": college_id}
            ).mappings().all()
            return [self._user_from_row(db, row) for row in rows]

    def close(self) -> None:
        self.engine.dispose()

    # ------------------------------------------------------------
    # Row helpers (run inside an open session)
    # ------------------------------------------------------------

    @staticmethod
    def _get_job(db, job_id: str) -> Optional[dict]:
        row = db.execute(text("SELECT * FROM jobs WHERE id = :id"), {"id": job_id}).mappings().first()
        return job_from_row(row) if row else None

    def _get_user(self, db, uid: str) -> Optional[dict]:
        row = db.execute(text("SELECT * FROM users WHERE uid = :uid"), {"uid": uid}).mappings().first()
        return self._user_from_row(db, row) if row else None

    @staticmethod
    def _user_from_row(db, row) -> dict:
        user = dict(row)
        user["skills"] = split_list(user["skills"])
        apps = db.execute(
            text("SELECT jobId, status, appliedAt FROM applications WHERE uid = :uid ORDER BY id"),
            {"uid": user["uid"]}
        ).mappings().all()
        user["applications"] = [dict(a) for a in apps]
        return user
