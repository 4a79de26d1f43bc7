"""Job applications: apply, status changes and the listings around them.

Status lifecycle::

    PENDING -> REVIEWED -> ACCEPTED | REJECTED

By default any status may be set from any other, which is how the board has
always behaved. With STRICT_STATUS_TRANSITIONS enabled only forward moves
(and re-setting the current status) are accepted.
"""

import logging
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from jobboard.core.config import settings
from jobboard.core.exceptions import ConflictError, NotFoundError, ValidationError
from jobboard.db.database import commit_or_rollback
from jobboard.db.models import Application, ApplicationStatus, Job
from jobboard.security.policy import Action, Actor, require
from jobboard.storage.resumes import ResumeStore

logger = logging.getLogger(__name__)

S = ApplicationStatus

FORWARD_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    S.PENDING: frozenset({S.REVIEWED, S.ACCEPTED, S.REJECTED}),
    S.REVIEWED: frozenset({S.ACCEPTED, S.REJECTED}),
    S.ACCEPTED: frozenset(),
    S.REJECTED: frozenset(),
}

ALREADY_APPLIED = "You have already applied for this job"
NOT_FOUND_OR_DENIED = "Application not found or access denied"


def can_transition(current: ApplicationStatus, new: ApplicationStatus, strict: bool = False) -> bool:
    if not strict or current is new:
        return True
    return new in FORWARD_TRANSITIONS[current]


def parse_status(value) -> ApplicationStatus:
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise ValidationError("Invalid status")


def _with_details(query):
    return query.options(
        joinedload(Application.job).joinedload(Job.company),
        joinedload(Application.applicant),
    )


def find_existing_application(db: Session, job_id: int, applicant_id: int) -> Optional[Application]:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.applicant_id == applicant_id)
        .first()
    )


async def apply_to_job(
    db: Session,
    store: ResumeStore,
    actor: Actor,
    job_id: int,
    resume: bytes,
    content_type: Optional[str],
    filename: Optional[str],
    cover_letter: Optional[str] = None,
) -> Application:
    """
    Files an application for the actor.

    The resume is validated before anything is written. The pre-check for an
    earlier application only gives a friendly answer; the unique constraint on
    (job_id, applicant_id) is what stops concurrent duplicates.
    """
    require(actor, Action.APPLY)
    store.validate(resume, content_type)

    job = db.query(Job).filter(Job.id == job_id).first()
    if job is None:
        raise NotFoundError("Job not found")

    if find_existing_application(db, job_id, actor.user_id) is not None:
        raise ConflictError(ALREADY_APPLIED)

    resume_url = await store.store(resume, content_type, filename)

    application = Application(
        job_id=job_id,
        applicant_id=actor.user_id,
        resume_url=resume_url,
        cover_letter=cover_letter or "",
        status=ApplicationStatus.PENDING,
    )
    db.add(application)
    try:
        commit_or_rollback(db, "filing an application")
    except IntegrityError:
        await store.discard(resume_url)
        # The job may have been deleted after the existence check.
        if db.query(Job.id).filter(Job.id == job_id).first() is None:
            logger.info(f"APPLY: Job {job_id} was deleted while user {actor.user_id} was applying.")
            raise NotFoundError("Job not found")
        logger.info(f"APPLY: Duplicate application by user {actor.user_id} for job {job_id} lost the race.")
        raise ConflictError(ALREADY_APPLIED)
    except Exception:
        await store.discard(resume_url)
        raise

    logger.info(f"APPLY: User {actor.user_id} applied to job {job_id} (application {application.id}).")
    return get_application(db, application.id)


def get_application(db: Session, application_id: int) -> Application:
    application = _with_details(db.query(Application)).filter(Application.id == application_id).first()
    if application is None:
        raise NotFoundError("Application not found")
    return application


def set_status(
    db: Session,
    actor: Actor,
    application_id: int,
    new_status,
    strict: Optional[bool] = None,
) -> Application:
    """
    Overwrites an application's status. Only the company that owns the job may
    do this; everyone else gets the same answer as for a missing application.
    """
    require(actor, Action.SET_APPLICATION_STATUS)
    status = parse_status(new_status)
    if strict is None:
        strict = settings.STRICT_STATUS_TRANSITIONS

    application = (
        db.query(Application)
        .filter(Application.id == application_id)
        .with_for_update()
        .first()
    )
    if application is None:
        raise NotFoundError(NOT_FOUND_OR_DENIED)
    require(actor, Action.SET_APPLICATION_STATUS, application, NOT_FOUND_OR_DENIED)

    if not can_transition(application.status, status, strict):
        raise ValidationError(
            f"Cannot change status from {application.status.value} to {status.value}"
        )

    previous = application.status
    application.status = status
    commit_or_rollback(db, "updating an application status")
    logger.info(
        f"APPLY: Company {actor.company_id} moved application {application_id} "
        f"from {previous.value} to {status.value}."
    )
    return get_application(db, application_id)


def list_for_applicant(db: Session, actor: Actor) -> List[Application]:
    require(actor, Action.LIST_OWN_APPLICATIONS)
    return (
        _with_details(db.query(Application))
        .filter(Application.applicant_id == actor.user_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )


def list_for_company(db: Session, actor: Actor) -> List[Application]:
    """Applications to the actor's own jobs only."""
    require(actor, Action.LIST_COMPANY_APPLICATIONS)
    if actor.company_id is None:
        return []
    return (
        _with_details(db.query(Application))
        .join(Job, Application.job_id == Job.id)
        .filter(Job.company_id == actor.company_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )


def get_resume_file(db: Session, store: ResumeStore, actor: Actor, application_id: int) -> Tuple[Path, str]:
    """Resolves the stored resume of an application the actor may see."""
    require(actor, Action.VIEW_RESUME)
    application = get_application(db, application_id)
    require(actor, Action.VIEW_RESUME, application, "Application not found")

    path = store.resolve(application.resume_url)
    if path is None:
        logger.error(f"STORAGE: Resume for application {application_id} is missing on disk.")
        raise NotFoundError("Resume file not found")
    return path, path.name
