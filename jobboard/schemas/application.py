# jobboard/schemas/application.py

from datetime import datetime
from typing import Optional

from jobboard.db.models import ApplicationStatus
from jobboard.schemas.base import CamelModel


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class ApplicationCompany(CamelModel):
    id: int
    name: str
    website: Optional[str] = None


class ApplicationJob(CamelModel):
    id: int
    title: str
    location: str
    category: str
    type: Optional[str] = None
    company: ApplicationCompany


class Applicant(CamelModel):
    id: int
    name: str
    email: str


class ApplicationResponse(CamelModel):
    id: int
    job_id: int
    applicant_id: int
    resume_url: str
    cover_letter: str
    status: ApplicationStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    job: ApplicationJob
    applicant: Applicant
