# jobboard/services/companies.py

import logging
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from jobboard.core.exceptions import ConflictError, NotFoundError, ValidationError
from jobboard.db.database import commit_or_rollback
from jobboard.db.models import Application, Company, Job
from jobboard.schemas.company import CompanyProfileUpdate
from jobboard.security.policy import Action, Actor, require

logger = logging.getLogger(__name__)

RECENT_APPLICATIONS_LIMIT = 5


def get_company(db: Session, company_id: int) -> Company:
    """Fetches a company with its jobs, newest first."""
    company = (
        db.query(Company)
        .options(selectinload(Company.jobs))
        .filter(Company.id == company_id)
        .first()
    )
    if company is None:
        raise NotFoundError("Company not found")
    return company


def update_profile(db: Session, actor: Actor, data: CompanyProfileUpdate) -> Company:
    """
    Updates the actor's own company profile, creating it when the account
    registered without one.
    """
    require(actor, Action.UPDATE_COMPANY_PROFILE)
    changes = data.model_dump(exclude_unset=True)

    company = (
        db.query(Company)
        .filter(Company.user_id == actor.user_id)
        .with_for_update()
        .first()
    )

    if company is None:
        if not changes.get("name"):
            raise ValidationError("Company name is required")
        company = Company(
            user_id=actor.user_id,
            name=changes["name"],
            description=changes.get("description") or "",
            website=changes.get("website") or None,
        )
        db.add(company)
        action = "created"
    else:
        require(actor, Action.UPDATE_COMPANY_PROFILE, company, "Company not found")
        if "name" in changes and not changes["name"]:
            raise ValidationError("Company name cannot be empty")
        for field, value in changes.items():
            if field == "description" and value is None:
                value = ""
            setattr(company, field, value)
        action = "updated"

    try:
        commit_or_rollback(db, "saving a company profile")
    except IntegrityError:
        raise ConflictError("Company profile already exists")

    db.refresh(company)
    logger.info(f"COMPANIES: User {actor.user_id} {action} company {company.id}.")
    return company


def dashboard_stats(db: Session, actor: Actor) -> Dict[str, Any]:
    """Job and application totals for the actor's company plus its latest applications."""
    require(actor, Action.VIEW_COMPANY_STATS)
    if actor.company_id is None:
        return {"total_jobs": 0, "total_applications": 0, "recent_applications": []}

    total_jobs = db.query(Job).filter(Job.company_id == actor.company_id).count()
    company_applications = (
        db.query(Application)
        .join(Job, Application.job_id == Job.id)
        .filter(Job.company_id == actor.company_id)
    )
    total_applications = company_applications.count()
    recent_applications = (
        company_applications
        .options(
            joinedload(Application.job).joinedload(Job.company),
            joinedload(Application.applicant),
        )
        .order_by(Application.created_at.desc(), Application.id.desc())
        .limit(RECENT_APPLICATIONS_LIMIT)
        .all()
    )

    return {
        "total_jobs": total_jobs,
        "total_applications": total_applications,
        "recent_applications": recent_applications,
    }
