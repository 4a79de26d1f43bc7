# jobboard/schemas/job.py

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from jobboard.schemas.base import CamelModel


class JobBase(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    salary: Optional[str] = None
    type: Optional[str] = None


class JobCreate(JobBase):
    pass


# Partial update: only the fields sent are written
class JobUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    salary: Optional[str] = None
    type: Optional[str] = None


class JobCompany(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    website: Optional[str] = None


class JobResponse(JobBase):
    id: int
    company_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    company: JobCompany
    application_count: int = 0


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class JobListResponse(CamelModel):
    jobs: List[JobResponse]
    pagination: Pagination


class MessageResponse(CamelModel):
    message: str
