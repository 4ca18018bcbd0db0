"""
Pydantic Schemas - Request/Response shapes.

Request bodies are deliberately permissive: every field is optional and
unknown fields are ignored. Missing data surfaces inside the handler and
goes down the generic error path, never as a 4xx.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from datetime import date
from enum import Enum

# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    college = "college"
    recruiter = "recruiter"

class _Permissive(BaseModel):
    model_config = ConfigDict(extra="ignore")

# ============================================================
# JOB SCHEMAS
# ============================================================

class JobPayload(_Permissive):
    """Body of POST /jobs and PUT /jobs/{id}. postedAt is never accepted."""
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    matchScore: Optional[int] = None
    recruiterId: Optional[str] = None
    skillsRequired: Optional[List[str]] = None
    experienceLevel: Optional[str] = None
    benefits: Optional[str] = None
    deadline: Optional[date] = None

class ApplyRequest(_Permissive):
    uid: Optional[str] = None

# ============================================================
# USER SCHEMAS
# ============================================================

class UserCreate(_Permissive):
    uid: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    collegeId: Optional[str] = None
    skills: Optional[List[str]] = None
    profileStrength: Optional[int] = None
    bio: Optional[str] = None

class UserUpdate(_Permissive):
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    collegeId: Optional[str] = None
    skills: Optional[List[str]] = None
    profileStrength: Optional[int] = None
    bio: Optional[str] = None

# ============================================================
# GENERIC RESPONSES
# ============================================================

class SuccessResponse(BaseModel):
    success: bool = True

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    status: str
    backend: str
