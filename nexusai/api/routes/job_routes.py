"""
Job Routes

GET /jobs - List all jobs, newest first
POST /jobs - Create job posting (broadcasts job:created)
PUT /jobs/{job_id} - Replace job fields (broadcasts job:updated)
DELETE /jobs/{job_id} - Delete job (broadcasts job:deleted)
POST /jobs/{job_id}/apply - Record an application for a user

Store calls block, so plain handlers run in FastAPI's threadpool and the
broadcasting handlers hand the store call to it with run_in_threadpool.
"""

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from nexusai.api.deps import get_notifier, get_repository
from nexusai.core.errors import api_errors
from nexusai.repositories.base import PlacementRepository
from nexusai.schemas.schemas import ApplyRequest, ErrorResponse, JobPayload, SuccessResponse
from nexusai.services.notifier import JOB_CREATED, JOB_DELETED, JOB_UPDATED, JobNotifier

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
    responses={500: {"model": ErrorResponse}}
)


@router.get("")
def list_jobs(repository: PlacementRepository = Depends(get_repository)):
    """List every job posting, newest first. No pagination."""
    with api_errors("Failed to fetch jobs"):
        return repository.list_jobs()


@router.post("", status_code=201)
async def create_job(
    job: JobPayload,
    repository: PlacementRepository = Depends(get_repository),
    notifier: JobNotifier = Depends(get_notifier)
):
    """Create a job. postedAt is always assigned by the server."""
    with api_errors("Failed to create job"):
        created = await run_in_threadpool(repository.create_job, job.model_dump())

    await notifier.broadcast(JOB_CREATED, created)
    return created


@router.put("/{job_id}")
async def update_job(
    job_id: str,
    job: JobPayload,
    repository: PlacementRepository = Depends(get_repository),
    notifier: JobNotifier = Depends(get_notifier)
):
    """Replace every field of a job. Returns null for an unknown id."""
    with api_errors("Failed to update job"):
        updated = await run_in_threadpool(repository.update_job, job_id, job.model_dump())

    if updated is not None:
        await notifier.broadcast(JOB_UPDATED, updated)
    return updated


@router.delete("/{job_id}", response_model=SuccessResponse)
async def delete_job(
    job_id: str,
    repository: PlacementRepository = Depends(get_repository),
    notifier: JobNotifier = Depends(get_notifier)
):
    """Delete a job. Deleting an unknown id also succeeds."""
    with api_errors("Failed to delete job"):
        await run_in_threadpool(repository.delete_job, job_id)

    await notifier.broadcast(JOB_DELETED, job_id)
    return SuccessResponse()


@router.post("/{job_id}/apply", response_model=SuccessResponse)
def apply_to_job(
    job_id: str,
    application: ApplyRequest,
    repository: PlacementRepository = Depends(get_repository)
):
    """Apply to a job. Every call records a new application."""
    with api_errors("Failed to apply for job"):
        if not application.uid:
            raise ValueError("uid is required to apply")
        repository.apply_to_job(job_id, application.uid)

    return SuccessResponse()
