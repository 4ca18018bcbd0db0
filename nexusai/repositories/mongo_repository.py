"""
MongoDB Repository - document store backend.

Collections in this database:
1. jobs  - Job postings, identity is the generated ObjectId
2. users - Users with their applications embedded as a list

WHY embed applications?
- They are only ever read together with their user
- Appending is a single atomic $push
"""

from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from nexusai.db.mongodb import COLLECTIONS
from nexusai.repositories.base import (
    APPLIED_STATUS,
    ROLES,
    USER_FIELDS,
    Clock,
    PlacementRepository,
    job_replacement,
    prepare_new_job,
    utcnow,
)

# Fields a user update may never touch
PROTECTED_USER_FIELDS = {"_id", "uid", "createdAt", "applications"}


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs) -> List[dict]:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse an id string; malformed ids behave like unknown ones."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def to_datetime(value: Any) -> Any:
    """BSON has no plain date type, store deadlines as midnight datetimes."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time())
    return value


def validate_role(role: Any) -> None:
    if role not in ROLES:
        raise ValueError(f"Invalid role '{role}', expected one of {ROLES}")


class MongoRepository(PlacementRepository):
    """
    Schema-validated document store.
    uid/email uniqueness is enforced by the unique indexes.
    """

    backend_name = "mongodb"

    def __init__(self, db: Database, clock: Clock = utcnow):
        super().__init__(clock)
        self.db = db
        self.jobs: Collection = db[COLLECTIONS["jobs"]]
        self.users: Collection = db[COLLECTIONS["users"]]

    # ------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------

    def list_jobs(self) -> List[dict]:
        cursor = self.jobs.find().sort("postedAt", DESCENDING)
        return serialize_docs(cursor)

    def create_job(self, data: Dict[str, Any]) -> dict:
        doc = prepare_new_job(data, self.clock())
        doc["deadline"] = to_datetime(doc["deadline"])
        result = self.jobs.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def update_job(self, job_id: str, data: Dict[str, Any]) -> Optional[dict]:
        oid = to_object_id(job_id)
        if oid is None:
            return None
        fields = job_replacement(data)
        fields["deadline"] = to_datetime(fields["deadline"])
        doc = self.jobs.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def delete_job(self, job_id: str) -> None:
        oid = to_object_id(job_id)
        if oid is not None:
            self.jobs.delete_one({"_id": oid})

    # ------------------------------------------------------------
    # Users
    # ------------------------------------------------------------

    def get_user(self, uid: str) -> Optional[dict]:
        return self._with_applications(self.users.find_one({"uid": uid}))

    def create_user(self, data: Dict[str, Any]) -> Optional[dict]:
        """
        Insert a user.

        Raises:
            ValueError: missing uid/email or unknown role
            DuplicateKeyError: uid or email already registered
        """
        if not data.get("uid") or not data.get("email"):
            raise ValueError("uid and email are required")
        doc = {field: data.get(field) for field in USER_FIELDS}
        doc["role"] = doc["role"] or "student"
        validate_role(doc["role"])
        doc["skills"] = list(doc["skills"] or [])
        if doc["profileStrength"] is None:
            doc["profileStrength"] = 0
        doc["applications"] = []
        doc["createdAt"] = self.clock()

        result = self.users.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def update_user(self, uid: str, data: Dict[str, Any]) -> Optional[dict]:
        """Set every provided field; fields not in the patch are kept."""
        fields = {
            key: value for key, value in data.items()
            if key in USER_FIELDS and key not in PROTECTED_USER_FIELDS
        }
        if "role" in fields:
            validate_role(fields["role"])
        if not fields:
            return self.get_user(uid)
        doc = self.users.find_one_and_update(
            {"uid": uid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return self._with_applications(doc)

    # ------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------

    def apply_to_job(self, job_id: str, uid: str) -> None:
        application = {
            "jobId": job_id,
            "status": APPLIED_STATUS,
            "appliedAt": self.clock()
        }
        self.users.update_one({"uid": uid}, {"$push": {"applications": application}})

    def list_college_students(self, college_id: str) -> List[dict]:
        cursor = self.users.find({"collegeId": college_id, "role": "student"})
        return [self._with_applications(doc) for doc in cursor]

    def close(self) -> None:
        self.db.client.close()

    @staticmethod
    def _with_applications(doc: Optional[dict]) -> Optional[dict]:
        doc = serialize_doc(doc)
        if doc is not None:
            doc.setdefault("applications", [])
        return doc
