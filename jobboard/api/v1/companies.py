# jobboard/api/v1/companies.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.db.database import get_db
from jobboard.schemas.company import (
    CompanyResponse, CompanyDetailResponse, CompanyProfileUpdate, DashboardStats
)
from jobboard.security.dependencies import get_current_actor
from jobboard.security.policy import Actor
from jobboard.services import companies as company_service
from jobboard.services.listing import list_companies

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=List[CompanyResponse])
def list_companies_endpoint(db: Session = Depends(get_db)):
    """All companies with the number of jobs each has posted."""
    return list_companies(db)


# Declared before /{company_id} so "profile" and "dashboard" are not parsed as ids.
@router.put("/profile", response_model=CompanyResponse)
def update_profile_endpoint(
    data: CompanyProfileUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return company_service.update_profile(db, actor, data)


@router.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats_endpoint(
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return company_service.dashboard_stats(db, actor)


@router.get("/{company_id}", response_model=CompanyDetailResponse)
def get_company_endpoint(company_id: int, db: Session = Depends(get_db)):
    return company_service.get_company(db, company_id)
