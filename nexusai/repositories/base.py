"""
Repository interface shared by both persistence backends.

Route handlers only ever talk to a PlacementRepository; which concrete
store sits behind it is decided once at startup (see select_repository).
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from nexusai.schemas.schemas import UserRole

Clock = Callable[[], datetime]

ROLES = tuple(role.value for role in UserRole)

# Every job attribute a client may write; identity and postedAt are excluded
JOB_FIELDS = (
    "title", "company", "location", "salary", "type", "description",
    "matchScore", "recruiterId", "skillsRequired", "experienceLevel",
    "benefits", "deadline",
)

USER_FIELDS = (
    "uid", "email", "name", "role", "collegeId", "skills",
    "profileStrength", "bio",
)

DEFAULT_MATCH_SCORE = 95
DEFAULT_RECRUITER_ID = "system"
DEFAULT_EXPERIENCE_LEVEL = "Entry Level"
APPLIED_STATUS = "Applied"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def prepare_new_job(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    """
    Build the record to persist for a new job.

    Only known attributes are copied, so a client cannot smuggle in an
    identity or postedAt. Defaults are filled for unset attributes.
    """
    record = {field: data.get(field) for field in JOB_FIELDS}
    if record["matchScore"] is None:
        record["matchScore"] = DEFAULT_MATCH_SCORE
    if not record["recruiterId"]:
        record["recruiterId"] = DEFAULT_RECRUITER_ID
    if not record["experienceLevel"]:
        record["experienceLevel"] = DEFAULT_EXPERIENCE_LEVEL
    if record["benefits"] is None:
        record["benefits"] = ""
    record["skillsRequired"] = list(record["skillsRequired"] or [])
    record["postedAt"] = now
    return record


def job_replacement(data: Dict[str, Any]) -> Dict[str, Any]:
    """Full-field replacement for an update: absent attributes become empty."""
    fields = {field: data.get(field) for field in JOB_FIELDS}
    fields["skillsRequired"] = list(fields["skillsRequired"] or [])
    return fields


class PlacementRepository(ABC):
    """
    One logical operation set over jobs, users and applications.

    Implementations never retry and never roll back across operations;
    store errors propagate to the caller untouched.
    """

    backend_name: str = ""

    def __init__(self, clock: Clock = utcnow):
        self.clock = clock

    # Jobs

    @abstractmethod
    def list_jobs(self) -> List[dict]:
        """All jobs, newest postedAt first. Unpaginated."""

    @abstractmethod
    def create_job(self, data: Dict[str, Any]) -> dict:
        """Persist a new job with a server-assigned postedAt and return it."""

    @abstractmethod
    def update_job(self, job_id: str, data: Dict[str, Any]) -> Optional[dict]:
        """Replace every writable attribute. Returns None for an unknown id."""

    @abstractmethod
    def delete_job(self, job_id: str) -> None:
        """Remove a job. Unknown ids are ignored."""

    # Users

    @abstractmethod
    def get_user(self, uid: str) -> Optional[dict]:
        """User record with its applications, or None."""

    @abstractmethod
    def create_user(self, data: Dict[str, Any]) -> Optional[dict]:
        pass

    @abstractmethod
    def update_user(self, uid: str, data: Dict[str, Any]) -> Optional[dict]:
        pass

    # Applications

    @abstractmethod
    def apply_to_job(self, job_id: str, uid: str) -> None:
        """Record one "Applied" application. Repeated applies each add a record."""

    @abstractmethod
    def list_college_students(self, college_id: str) -> List[dict]:
        """Students affiliated with a college, each with applications."""

    def close(self) -> None:
        """Release the underlying connection."""
