# jobboard/services/jobs.py

import logging

from sqlalchemy.orm import Session, joinedload

from jobboard.core.exceptions import NotFoundError, ValidationError
from jobboard.db.database import commit_or_rollback
from jobboard.db.models import Company, Job
from jobboard.schemas.job import JobCreate, JobUpdate
from jobboard.security.policy import Action, Actor, require

logger = logging.getLogger(__name__)

NOT_FOUND_OR_DENIED = "Job not found or access denied"


def get_job(db: Session, job_id: int) -> Job:
    job = (
        db.query(Job)
        .options(joinedload(Job.company))
        .filter(Job.id == job_id)
        .first()
    )
    if job is None:
        raise NotFoundError("Job not found")
    return job


def _lock_owned_job(db: Session, actor: Actor, action: Action, job_id: int) -> Job:
    """Re-reads the job row for update and checks ownership against that row."""
    job = db.query(Job).filter(Job.id == job_id).with_for_update().first()
    if job is None:
        raise NotFoundError(NOT_FOUND_OR_DENIED)
    require(actor, action, job, NOT_FOUND_OR_DENIED)
    return job


def create_job(db: Session, actor: Actor, data: JobCreate) -> Job:
    require(actor, Action.CREATE_JOB)

    company = None
    if actor.company_id is not None:
        company = db.query(Company).filter(Company.id == actor.company_id).first()
    if company is None:
        raise ValidationError("Create your company profile before posting jobs")
    require(actor, Action.CREATE_JOB, company)

    job = Job(company=company, **data.model_dump())
    db.add(job)
    commit_or_rollback(db, "creating a job")
    db.refresh(job)
    logger.info(f"JOBS: Company {company.id} created job {job.id}.")
    return job


def update_job(db: Session, actor: Actor, job_id: int, data: JobUpdate) -> Job:
    require(actor, Action.UPDATE_JOB)
    job = _lock_owned_job(db, actor, Action.UPDATE_JOB, job_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in ("title", "description", "location", "category"):
            raise ValidationError(f"{field} cannot be empty")
        setattr(job, field, value)

    commit_or_rollback(db, "updating a job")
    db.refresh(job)
    logger.info(f"JOBS: Company {job.company_id} updated job {job.id}.")
    return job


def delete_job(db: Session, actor: Actor, job_id: int) -> None:
    """Deletes a job together with its applications."""
    require(actor, Action.DELETE_JOB)
    job = _lock_owned_job(db, actor, Action.DELETE_JOB, job_id)

    db.delete(job)
    commit_or_rollback(db, "deleting a job")
    logger.info(f"JOBS: Company {actor.company_id} deleted job {job_id}.")
