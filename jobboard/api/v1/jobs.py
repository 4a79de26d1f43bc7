# jobboard/api/v1/jobs.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobboard.db.database import get_db
from jobboard.schemas.job import (
    JobCreate, JobUpdate, JobResponse, JobListResponse, MessageResponse
)
from jobboard.security.dependencies import get_current_actor
from jobboard.security.policy import Actor
from jobboard.services import jobs as job_service
from jobboard.services.listing import (
    DEFAULT_PAGE_SIZE, MAX_PAGE, MAX_PAGE_SIZE, JobFilters, list_jobs, page_count
)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
def list_jobs_endpoint(
    search: Optional[str] = None,
    location: Optional[str] = None,
    category: Optional[str] = None,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """Search job postings. Filters are case-insensitive substring matches."""
    filters = JobFilters(search=search, location=location, category=category)
    jobs, total = list_jobs(db, filters, page, limit)
    return {
        "jobs": jobs,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": page_count(total, limit),
        },
    }


@router.get("/{job_id}", response_model=JobResponse)
def get_job_endpoint(job_id: int, db: Session = Depends(get_db)):
    return job_service.get_job(db, job_id)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job_endpoint(
    data: JobCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Post a job for the current company."""
    return job_service.create_job(db, actor, data)


@router.put("/{job_id}", response_model=JobResponse)
def update_job_endpoint(
    job_id: int,
    data: JobUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return job_service.update_job(db, actor, job_id, data)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job_endpoint(
    job_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Delete a job and every application filed against it."""
    job_service.delete_job(db, actor, job_id)
    return {"message": "Job deleted successfully"}
