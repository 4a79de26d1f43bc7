# jobboard/schemas/__init__.py

from .user import UserCreate, UserLogin, UserResponse, AuthResponse, MeResponse
from .job import JobCreate, JobUpdate, JobResponse, JobListResponse, Pagination, MessageResponse
from .application import ApplicationStatusUpdate, ApplicationResponse
from .company import (
    CompanyResponse, CompanyDetailResponse, CompanyProfileUpdate, DashboardStats
)
