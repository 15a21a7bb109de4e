"""
CRUD operations for Job model.

Every function takes the caller's user_id and filters on it, so a caller can
never read or change another user's jobs. Database failures are rolled back
and re-raised as StorageError.
"""

import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from jobloom.models.job import Job
from jobloom.schemas.job import JobCreateRequest, JobUpdateRequest

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a database operation fails"""
    pass


def _owned(db: Session, user_id: str, job_id: UUID):
    return db.query(Job).filter(Job.id == job_id, Job.user_id == user_id)


def create(db: Session, user_id: str, job_data: JobCreateRequest) -> Job:
    """
    Create a new job owned by user_id.

    Args:
        db: Database session
        user_id: Verified subject id of the caller
        job_data: Validated job fields

    Returns:
        Created Job instance with id

    Raises:
        StorageError: If the insert fails
    """
    db_job = Job(user_id=user_id, **job_data.model_dump())

    try:
        db.add(db_job)
        db.commit()
        db.refresh(db_job)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to create job: {e}") from e

    return db_job


def get_by_id(db: Session, user_id: str, job_id: UUID) -> Optional[Job]:
    """
    Retrieve one of the caller's jobs by its ID.

    Returns:
        Job instance if found and owned by user_id, None otherwise
    """
    try:
        return _owned(db, user_id, job_id).first()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to load job {job_id}: {e}") from e


def get_multi_by_owner(db: Session, user_id: str, status: Optional[str] = None) -> List[Job]:
    """
    Retrieve all jobs owned by user_id.

    Args:
        db: Database session
        user_id: Verified subject id of the caller
        status: Optional exact-match status filter

    Returns:
        List of Job instances, in no guaranteed order
    """
    try:
        query = db.query(Job).filter(Job.user_id == user_id)
        if status is not None:
            query = query.filter(Job.status == status)
        return query.all()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to list jobs: {e}") from e


def update(
    db: Session,
    user_id: str,
    job_id: UUID,
    job_data: JobUpdateRequest
) -> Optional[Job]:
    """
    Apply the fields present in job_data to one of the caller's jobs.

    Returns:
        Updated Job instance, or None if no job with that id is owned by user_id
    """
    changes = job_data.model_dump(exclude_unset=True)

    try:
        job = _owned(db, user_id, job_id).first()
        if not job:
            return None

        for field, value in changes.items():
            setattr(job, field, value)

        db.commit()
        db.refresh(job)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to update job {job_id}: {e}") from e

    return job


def delete(db: Session, user_id: str, job_id: UUID) -> bool:
    """
    Delete one of the caller's jobs.

    Returns:
        True if a job was deleted, False if none matched
    """
    try:
        deleted = _owned(db, user_id, job_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to delete job {job_id}: {e}") from e

    return deleted > 0
