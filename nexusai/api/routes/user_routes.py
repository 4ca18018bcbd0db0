"""
User Routes

GET /users/{uid} - Get user with applications
POST /users - Create user
PUT /users/{uid} - Update user
"""

from fastapi import APIRouter, Depends

from nexusai.api.deps import get_repository
from nexusai.core.errors import api_errors
from nexusai.repositories.base import PlacementRepository
from nexusai.schemas.schemas import ErrorResponse, UserCreate, UserUpdate

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={500: {"model": ErrorResponse}}
)


@router.get("/{uid}")
def get_user(uid: str, repository: PlacementRepository = Depends(get_repository)):
    """Get a user and their applications. Unknown uids return null."""
    with api_errors("Failed to fetch user"):
        return repository.get_user(uid)


@router.post("", status_code=201)
def create_user(user: UserCreate, repository: PlacementRepository = Depends(get_repository)):
    with api_errors("Failed to create user"):
        return repository.create_user(user.model_dump())


@router.put("/{uid}")
def update_user(uid: str, user: UserUpdate, repository: PlacementRepository = Depends(get_repository)):
    """
    Update a user. Only the fields present in the body are passed on;
    the SQLite store writes name and bio only.
    """
    with api_errors("Failed to update user"):
        return repository.update_user(uid, user.model_dump(exclude_unset=True))
