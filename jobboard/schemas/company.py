# jobboard/schemas/company.py

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from jobboard.schemas.base import CamelModel
from jobboard.schemas.application import ApplicationResponse


class CompanyResponse(CamelModel):
    id: int
    name: str
    description: str
    website: Optional[str] = None
    created_at: datetime
    job_count: int = 0


class CompanyJobItem(CamelModel):
    id: int
    title: str
    location: str
    category: str
    type: Optional[str] = None
    created_at: datetime


class CompanyDetailResponse(CompanyResponse):
    jobs: List[CompanyJobItem] = []


# PUT /companies/profile. Fields left out keep their stored value.
class CompanyProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    website: Optional[str] = None


class DashboardStats(CamelModel):
    total_jobs: int
    total_applications: int
    recent_applications: List[ApplicationResponse]
