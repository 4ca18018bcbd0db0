"""
College Routes

GET /colleges/{college_id}/students - Students of a college with their applications
"""

from fastapi import APIRouter, Depends

from nexusai.api.deps import get_repository
from nexusai.core.errors import api_errors
from nexusai.repositories.base import PlacementRepository
from nexusai.schemas.schemas import ErrorResponse

router = APIRouter(
    prefix="/colleges",
    tags=["Colleges"],
    responses={500: {"model": ErrorResponse}}
)


@router.get("/{college_id}/students")
def list_college_students(college_id: str, repository: PlacementRepository = Depends(get_repository)):
    with api_errors("Failed to fetch college students"):
        return repository.list_college_students(college_id)
