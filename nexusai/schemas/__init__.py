"""
Schemas module - Request/Response schemas for API endpoints.
"""
from nexusai.schemas.schemas import (
    UserRole,
    JobPayload,
    UserCreate,
    UserUpdate,
    ApplyRequest,
    SuccessResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "UserRole",
    "JobPayload",
    "UserCreate",
    "UserUpdate",
    "ApplyRequest",
    "SuccessResponse",
    "ErrorResponse",
    "HealthResponse",
]
