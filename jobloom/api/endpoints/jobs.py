import logging
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from jobloom.core.database import get_db
from jobloom.core.deps import get_current_uid
from jobloom.crud import job as job_crud
from jobloom.crud.job import StorageError
from jobloom.schemas.job import JobCreateRequest, JobUpdateRequest, JobResponse, JobDeleteResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)

SERVER_ERROR = "Server error"


@router.post("", status_code=201, response_model=JobResponse)
def create_job(
    request: Optional[JobCreateRequest] = None,
    user_id: str = Depends(get_current_uid),
    db: Session = Depends(get_db)
):
    """
    Create a job application for the caller.

    The owner is always the verified caller; an owner field in the body is ignored.
    """
    request = request or JobCreateRequest()
    try:
        new_job = job_crud.create(db, user_id, request)
    except StorageError as e:
        logger.error(f"Error creating job: {e}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)

    logger.info(f"Created job {new_job.id} for user {user_id}")
    return new_job


@router.get("", response_model=List[JobResponse])
def list_jobs(
    status: Optional[str] = None,
    user_id: str = Depends(get_current_uid),
    db: Session = Depends(get_db)
):
    """
    List the caller's job applications.

    Args:
        status: Optional exact-match filter on the job's status
    """
    try:
        return job_crud.get_multi_by_owner(db, user_id, status=status)
    except StorageError as e:
        logger.error(f"Error listing jobs: {e}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(
    job_id: UUID,
    user_id: str = Depends(get_current_uid),
    db: Session = Depends(get_db)
):
    """Retrieve one of the caller's jobs by ID."""
    try:
        job = job_crud.get_by_id(db, user_id, job_id)
    except StorageError as e:
        logger.error(f"Error loading job: {e}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)

    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return job


@router.put("/{job_id}", response_model=Optional[JobResponse])
def update_job(
    job_id: UUID,
    request: Optional[JobUpdateRequest] = None,
    user_id: str = Depends(get_current_uid),
    db: Session = Depends(get_db)
):
    """
    Update fields on one of the caller's jobs.

    Only fields present in the body change. Returns null when the job does
    not exist or belongs to someone else.
    """
    request = request or JobUpdateRequest()
    try:
        job = job_crud.update(db, user_id, job_id, request)
    except StorageError as e:
        logger.error(f"Error updating job: {e}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)

    if job:
        logger.info(f"Updated job {job_id}")
    return job


@router.delete("/{job_id}", response_model=JobDeleteResponse)
def delete_job(
    job_id: UUID,
    user_id: str = Depends(get_current_uid),
    db: Session = Depends(get_db)
):
    """
    Delete one of the caller's jobs.

    Succeeds whether or not a matching job existed.
    """
    try:
        deleted = job_crud.delete(db, user_id, job_id)
    except StorageError as e:
        logger.error(f"Error deleting job: {e}")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)

    if deleted:
        logger.info(f"Deleted job {job_id}")
    return JobDeleteResponse(message="Job deleted successfully")
