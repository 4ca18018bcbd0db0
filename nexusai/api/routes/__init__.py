"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from nexusai.api.routes.job_routes import router as job_router
from nexusai.api.routes.user_routes import router as user_router
from nexusai.api.routes.college_routes import router as college_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(job_router)
api_router.include_router(user_router)
api_router.include_router(college_router)

__all__ = ["api_router"]
